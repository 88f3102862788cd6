"""Classification of parsed API responses into payloads or errors."""

import logging
from typing import Any

from .errors import ApiError, UnknownApiError

logger = logging.getLogger(__name__)

ERROR_MARKER = "E"


def has_error_list(payload: Any) -> bool:
    if not isinstance(payload, dict):
        return False
    errors = payload.get("error")
    return isinstance(errors, list) and len(errors) > 0


def normalize_response(payload: Any) -> Any:
    """
    Return ``payload`` unchanged unless it carries a non-empty ``error`` list.

    Entries starting with ``E`` are error codes; the marker is stripped and
    the codes raised together as :class:`ApiError`. A non-empty list without
    any such entry raises :class:`UnknownApiError`.
    """
    if not has_error_list(payload):
        return payload

    errors = payload["error"]
    codes = [
        entry[len(ERROR_MARKER):]
        for entry in errors
        if isinstance(entry, str) and entry.startswith(ERROR_MARKER)
    ]
    if not codes:
        logger.debug("Unrecognized API errors: %r", errors)
        raise UnknownApiError(errors)

    logger.debug("API returned error codes: %s", ", ".join(codes))
    raise ApiError(codes, {"errors": errors})
