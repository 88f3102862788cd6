"""
Ethermine Pool SDK for Python

Provides an async client for the Ethermine pool HTTP API.

Example:
    >>> from ethermine import EthermineClient
    >>>
    >>> client = EthermineClient("0xYOUR_WALLET", timeout=10000)
    >>>
    >>> # Pool-wide statistics
    >>> stats = await client.call("poolStats")
    >>>
    >>> # Node-style callback, same outcome as awaiting the future
    >>> client.call("miner/:miner/currentStats", lambda err, res: print(err or res))
"""

import logging

from .client import EthermineClient
from .encoding import encode_params
from .methods import DEFAULT_METHODS, MethodTable
from .models import (
    ClientConfig,
    MethodCategory,
    Route,
    SignedRequest,
)
from .response import normalize_response
from .signing import NonceGenerator, get_message_signature, sign_request
from .errors import (
    EthermineError,
    UnknownMethodError,
    MissingParameterError,
    EncodingError,
    InvalidSecretError,
    NetworkError,
    ParseError,
    ApiError,
    UnknownApiError,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"
__all__ = [
    "EthermineClient",
    "ClientConfig",
    "MethodCategory",
    "MethodTable",
    "DEFAULT_METHODS",
    "Route",
    "SignedRequest",
    "NonceGenerator",
    "encode_params",
    "get_message_signature",
    "sign_request",
    "normalize_response",
    "EthermineError",
    "UnknownMethodError",
    "MissingParameterError",
    "EncodingError",
    "InvalidSecretError",
    "NetworkError",
    "ParseError",
    "ApiError",
    "UnknownApiError",
]
