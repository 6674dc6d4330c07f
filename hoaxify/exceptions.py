"""Application exceptions.

Each exception carries an HTTP status and a message key; the key is resolved
against the locale catalogs when the error response is rendered.
"""


class HoaxifyException(Exception):
    """Base class for errors that are reported to the client."""

    status_code = 500
    default_message_key = "internal_error"

    def __init__(self, message_key: str | None = None) -> None:
        self.message_key = message_key or self.default_message_key
        super().__init__(self.message_key)


class ValidationException(HoaxifyException):
    status_code = 400
    default_message_key = "validation_failure"

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__()
        self.errors = errors


class AuthenticationException(HoaxifyException):
    status_code = 401
    default_message_key = "authentication_failure"


class InvalidTokenException(HoaxifyException):
    status_code = 401
    default_message_key = "account_activation_failure"


class ForbiddenException(HoaxifyException):
    status_code = 403
    default_message_key = "inactive_authentication_failure"


class NotFoundException(HoaxifyException):
    status_code = 404
    default_message_key = "user_not_found"


class FileSizeException(HoaxifyException):
    status_code = 400
    default_message_key = "attachment_size_limit"


class EmailException(HoaxifyException):
    status_code = 502
    default_message_key = "email_failure"
