class StoreError(Exception):
    """Raised by a store when a write fails (constraint violation, lost connection)."""


class ImportConfigurationError(Exception):
    """Raised when a job is requested with settings it cannot run under."""
