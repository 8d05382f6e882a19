"""Action entry points, one module per area.

Each action takes ``(db, credentials, *args)``, resolves the caller's
session, applies workspace scoping and converts failures to ``ActionError``.
"""
