"""
Ethermine SDK Error Classes

Custom exception types for better error handling.
"""

from typing import Optional, List, Dict, Any


class EthermineError(Exception):
    """Base exception for Ethermine SDK errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


class UnknownMethodError(EthermineError):
    """Raised when a method name is not registered in any category."""

    def __init__(self, method: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"{method} is not a valid API method.", "UNKNOWN_METHOD", details)
        self.method = method


class MissingParameterError(EthermineError):
    """Raised when a path placeholder has no identifier to substitute."""

    def __init__(
        self,
        method: str,
        parameter: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            f"{method} requires the '{parameter}' parameter",
            "MISSING_PARAMETER",
            details,
        )
        self.method = method
        self.parameter = parameter


class EncodingError(EthermineError):
    """Raised when request parameters cannot be serialized."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "ENCODING_ERROR", details)


class InvalidSecretError(EthermineError):
    """Raised when the signing secret is not valid base64."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "INVALID_SECRET", details)


class NetworkError(EthermineError):
    """Raised when a network error occurs."""

    def __init__(
        self,
        message: str,
        timeout: bool = False,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, "NETWORK_ERROR", details)
        self.timeout = timeout
        self.status_code = status_code


class ParseError(EthermineError):
    """Raised when the response body is not valid JSON."""

    def __init__(self, message: str, body: str = "", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "PARSE_ERROR", {"body": body, **(details or {})})
        self.body = body


class ApiError(EthermineError):
    """Raised when the API reports one or more error codes."""

    def __init__(self, codes: List[str], details: Optional[Dict[str, Any]] = None):
        super().__init__(", ".join(codes), "API_ERROR", details)
        self.codes = list(codes)


class UnknownApiError(EthermineError):
    """Raised when the API reports errors that carry no recognizable code."""

    def __init__(self, errors: List[Any], details: Optional[Dict[str, Any]] = None):
        super().__init__("Ethpool API returned an unknown error", "UNKNOWN_API_ERROR", details)
        self.errors = list(errors)
