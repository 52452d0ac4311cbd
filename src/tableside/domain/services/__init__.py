"""
Domain services - use cases over the table aggregate.

Contains the order lifecycle manager, the cross-table order query engine,
the notifier contract with its post-commit dispatcher, and the per-table
lock manager.
"""
