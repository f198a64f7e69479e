"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class BroadcastError(AdapterError):
    """Realtime gateway could not deliver an event."""

    pass
