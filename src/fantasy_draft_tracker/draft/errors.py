class DraftError(Exception):
    """Base class for draft tracker errors."""


class InvalidStateError(DraftError):
    """Raised when an action would break a draft invariant. State is left unchanged."""


class DataUnavailableError(DraftError):
    """Raised when the player catalog or the snapshot store cannot be read or written."""
