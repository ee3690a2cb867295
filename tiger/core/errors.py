"""Error taxonomy shared by the recurrence engine and the API layer.

Services raise these; ``tiger.main`` maps them to HTTP responses.
"""


class TigerError(Exception):
    """Base class for domain errors."""


class ValidationError(TigerError):
    """Invalid recurrence configuration or a forbidden edit. Nothing is persisted."""


class NotFoundError(TigerError):
    """Record does not exist or belongs to another user."""


class StorageError(TigerError):
    """Persistence failure; the surrounding transaction has been rolled back."""
