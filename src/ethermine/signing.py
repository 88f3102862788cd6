"""
Request signing for private API methods.

A private request is authenticated with::

    API-Sign = base64(HMAC-SHA512(b64decode(secret), path + SHA256(nonce + body)))

where ``body`` is the encoded request parameters and the inner SHA-256 digest is
appended to the path as raw bytes.
"""

import base64
import binascii
import hashlib
import hmac
import threading
import time
from typing import Any, Mapping, Optional, Union

from .encoding import encode_params
from .errors import InvalidSecretError
from .models import SignedRequest


def decode_secret(secret: str) -> bytes:
    """Decode a base64 secret, rejecting anything that is not strict base64."""
    try:
        return base64.b64decode(secret, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidSecretError("API secret is not valid base64") from exc


def get_message_signature(
    path: str,
    encoded_body: str,
    secret: str,
    nonce: Union[int, str],
) -> str:
    secret_bytes = decode_secret(secret)
    hash_digest = hashlib.sha256(f"{nonce}{encoded_body}".encode("utf-8")).digest()
    mac = hmac.new(secret_bytes, path.encode("utf-8") + hash_digest, hashlib.sha512)
    return base64.b64encode(mac.digest()).decode("ascii")


def sign_request(
    path: str,
    params: Mapping[str, Any],
    secret: str,
    nonce: int,
) -> SignedRequest:
    """Encode ``params`` and sign them for ``path``.

    ``params`` should already contain the nonce: the server hashes the body it
    receives, so the nonce has to be part of it.
    """
    encoded_body = encode_params(params)
    return SignedRequest(
        path=path,
        encoded_body=encoded_body,
        nonce=nonce,
        signature=get_message_signature(path, encoded_body, secret, nonce),
    )


class NonceGenerator:
    """
    Microsecond-resolution nonces, strictly increasing per instance.

    If the clock has not advanced (or has gone backwards) since the last
    nonce, the previous value is bumped by one instead.
    """

    def __init__(self, clock: Optional[Any] = None):
        self._clock = clock or time.time_ns
        self._last = 0
        self._lock = threading.Lock()

    def __call__(self) -> int:
        return self.next()

    def next(self) -> int:
        with self._lock:
            candidate = self._clock() // 1000
            if candidate <= self._last:
                candidate = self._last + 1
            self._last = candidate
            return candidate
