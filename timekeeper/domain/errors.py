"""
Ledger error hierarchy.

Use cases raise these before touching the store; the API layer maps them
to HTTP status codes.
"""


class LedgerError(Exception):
    pass


class InvalidInputError(LedgerError, ValueError):
    """Unparseable month/date/hours, empty code, malformed email."""


class NotFoundError(LedgerError):
    """Referenced project does not exist."""


class ConflictError(LedgerError):
    """Duplicate project code or user email."""


class StoreUnavailableError(LedgerError):
    """Database cannot be opened or migrated."""
