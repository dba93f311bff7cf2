"""
Client-side network errors.
"""
from typing import Optional


class NetworkError(Exception):
    custom_message = "Something went wrong"


class InvalidURLError(NetworkError):
    pass


class UnauthorizedError(NetworkError):
    custom_message = "Invalid credentials"


class DecodingError(NetworkError):
    custom_message = "Server data format invalid"


class UnknownNetworkError(NetworkError):
    def __init__(self, message: str = "", status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
