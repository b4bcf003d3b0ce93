"""
Exception classes for storjsync
"""


class StorjSyncException(Exception):
    """
    Base exception for all storjsync errors.
    """

    def __init__(self, message: str, status_code: int = None, error_code: str = None):
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code


class ObjectNotFoundException(StorjSyncException):
    """Thrown when an object is not found."""

    def __init__(self, bucket_name: str, object_name: str):
        super().__init__(
            f"Object '{object_name}' not found in bucket '{bucket_name}'.",
            status_code=404,
            error_code="NoSuchKey"
        )


class AuthenticationException(StorjSyncException):
    """Thrown when the gateway rejects the request signature or credentials."""

    def __init__(self, message: str):
        super().__init__(
            message,
            status_code=401,
            error_code="InvalidAccessKeyId"
        )


class AccessDeniedException(StorjSyncException):
    """Thrown when access is denied."""

    def __init__(self, message: str):
        super().__init__(
            message,
            status_code=403,
            error_code="AccessDenied"
        )


class ServerException(StorjSyncException):
    """Thrown when the server returns an error."""

    def __init__(self, message: str, status_code: int, error_code: str = None):
        super().__init__(message, status_code, error_code)


class ConfigurationException(StorjSyncException):
    """
    Thrown when the client configuration is missing or malformed.

    Unlike transport errors this is never swallowed: a broken configuration
    makes every later request meaningless.
    """

    def __init__(self, message: str, field: str = None):
        super().__init__(message, error_code="InvalidConfiguration")
        self.field = field
