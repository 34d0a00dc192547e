"""
Contact Relay App

Backs the farm's Contact page:
- Validates and sanitizes the visitor's message
- Relays it to the farm backend (POST /contact)
- Passes through the backend's mail configuration check (GET /contact/test)

Nothing is stored here; delivery is the backend's job.
"""
