"""
Centralized test suite for the farm console.

Test Organization:
- test_*.py here cover the shared machinery (Resource Client, record stores,
  view pipeline, numbering, modal controller, generic page views)
- App-specific tests remain in their respective app directories (e.g., sales_orders/tests.py)
"""
