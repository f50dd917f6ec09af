"""Shared error kinds and the DRF exception handler.

Two domain error kinds cross module boundaries:

- ``NotFound``: a referenced user, product or order does not exist.
- ``InvalidRequest``: the request is well-formed but violates a business
  rule (bad status transition, insufficient stock or balance).

Each module subclasses them in its own ``exceptions.py``.  Views translate
``NotFound`` into 404 and ``InvalidRequest`` into 400.

``standard_exception_handler`` only formats DRF framework errors
(validation, parsing, authentication, routing) into a stable envelope::

    {"type": "validation_error",
     "errors": [{"code": "required", "detail": "...", "attr": "email"}]}
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from rest_framework import exceptions as drf_exceptions
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = structlog.get_logger(__name__)


class NotFound(Exception):
    """A referenced entity does not exist."""


class InvalidRequest(Exception):
    """A business rule rejected the request."""


class Conflict(Exception):
    """The request collides with existing state (e.g. duplicate e-mail)."""


# ---------------------------------------------------------------------------
# DRF exception handler
# ---------------------------------------------------------------------------


def standard_exception_handler(
    exc: Exception, context: Dict[str, Any]
) -> Optional[Response]:
    """Render DRF exceptions with a ``type`` + ``errors`` envelope."""
    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, drf_exceptions.ValidationError):
        error_type = "validation_error"
    elif response.status_code >= 500:
        error_type = "server_error"
    else:
        error_type = "client_error"

    errors = _flatten_errors(response.data)
    logger.info(
        "api.error_response",
        status_code=response.status_code,
        type=error_type,
        error_count=len(errors),
    )
    response.data = {"type": error_type, "errors": errors}
    return response


def _flatten_errors(data: Any, attr: Optional[str] = None) -> List[Dict[str, Any]]:
    """Flatten DRF error data into ``{code, detail, attr}`` entries.

    Nested serializer and list errors get dotted ``attr`` paths such as
    ``items.0.quantity``; a lone ``detail`` carries no ``attr``.
    """
    if isinstance(data, dict):
        if "detail" in data and len(data) == 1:
            return _flatten_errors(data["detail"], attr)
        errors: List[Dict[str, Any]] = []
        for key, value in data.items():
            nested = key if attr is None else f"{attr}.{key}"
            errors.extend(_flatten_errors(value, nested))
        return errors
    if isinstance(data, list):
        errors = []
        for index, value in enumerate(data):
            if isinstance(value, (dict, list)):
                nested = str(index) if attr is None else f"{attr}.{index}"
                errors.extend(_flatten_errors(value, nested))
            else:
                errors.extend(_flatten_errors(value, attr))
        return errors
    code = getattr(data, "code", None) or "error"
    return [{"code": code, "detail": str(data), "attr": attr}]
