class RelayError(Exception):
    """Base error for the relay. `message` is what ends up in the JSON reply."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(RelayError):
    """Missing or invalid input sent by the client (HTTP 400)."""


class UpstreamError(RelayError):
    """The vision API call failed or could not be made (HTTP 500)."""
