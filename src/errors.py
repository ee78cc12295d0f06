"""Error taxonomy: what the client sees vs. what only the logs see."""


class ModelInvocationError(Exception):
    """Raised by an inference client when the upstream call fails.

    The message is a fixed, generic string; the provider error is kept on
    ``__cause__`` for the logs.
    """


class ResourceCleanupError(Exception):
    """Raised when a temporary upload could not be deleted. Never surfaced."""


class GatewayError(Exception):
    """Base for errors rendered to the client as ``{"error": message}``."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ClientInputError(GatewayError):
    status_code = 400


class InferenceError(GatewayError):
    status_code = 500
