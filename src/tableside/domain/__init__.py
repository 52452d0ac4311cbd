"""
Domain layer - table aggregate and the rules that govern it.

This package contains:
- Models: tables, services, orders, items
- Services: order lifecycle, order queries, notifications, per-table locks
- Authorization: role policy for lifecycle operations
- Exceptions: error taxonomy surfaced to API callers
"""
