"""Custom exception classes for the API."""


class ValidationError(Exception):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class DraftTooLongError(Exception):
    """Raised when a generated draft was cut off by the token limit."""

    def __init__(self, key_point_count: int):
        self.key_point_count = key_point_count
        super().__init__("Draft too long - try with fewer key points")
