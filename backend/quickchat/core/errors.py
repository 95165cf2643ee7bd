# quickchat/core/errors.py


class ChatError(Exception):
    """Base for every failure that reaches the client as {success: false, message}."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ChatError):
    """Missing or malformed input"""

    status_code = 400


class ConflictError(ChatError):
    """Duplicate email at signup"""

    status_code = 409


class AuthError(ChatError):
    """Bad credentials, or a missing, invalid or expired token"""

    status_code = 401


class UpstreamError(ChatError):
    """Asset store or database failure"""

    status_code = 502
