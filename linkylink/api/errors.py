FALLBACK_MESSAGE = "Something went wrong"
NETWORK_MESSAGE = "Unable to reach the server"


class ApiError(Exception):
    """Base class for go-links API failures."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class RequestError(ApiError):
    """Raised for transport failures and non-success responses other than 401."""


class AuthError(ApiError):
    """Raised when the server rejects the credential (HTTP 401)."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message, status_code=401)
