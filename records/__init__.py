"""
Record Management App

Shared machinery behind every management page:
- Record stores (backend-wired read-through cache, session-held local lists)
- Derived view pipeline (filtering, stable multi-key sorting)
- Sequence numbering (batch numbers, order numbers, references, local ids)
- Modal form controller (create/edit state machine)
- Generic page endpoints mounted once per collection
"""
