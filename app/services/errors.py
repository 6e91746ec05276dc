from __future__ import annotations


class TextRelayError(Exception):
    """Base error for text slot operations.

    Carries the HTTP status and the message shown to clients in the
    ``{"error": ...}`` body.
    """

    status_code: int = 500
    default_message: str = "internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidCodeSyntax(TextRelayError):
    status_code = 400
    default_message = "invalid code"


class NotFound(TextRelayError):
    # Same for never created, swept and expired on access
    status_code = 404
    default_message = "not found"


class InvalidInput(TextRelayError):
    status_code = 400
    default_message = "text is required"


class GeneratorFailure(TextRelayError):
    status_code = 500
    default_message = "code generation failed"
