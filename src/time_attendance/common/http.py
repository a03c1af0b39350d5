from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Optional

from flask import current_app, jsonify, request, session

from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)


def json_error(message: str, status: int):
    return jsonify({"error": message}), status


def json_payload() -> Any:
    """Request JSON body, or None when missing/malformed."""
    return request.get_json(silent=True)


def json_object() -> dict:
    payload = json_payload()
    return payload if isinstance(payload, dict) else {}


def session_user_id() -> Optional[int]:
    value = session.get("user_id")
    return int(value) if value is not None else None


def client_ip() -> Optional[str]:
    forwarded = request.headers.get("X-Forwarded-For", "")
    if forwarded:
        return forwarded.split(",")[0].strip() or None
    return request.remote_addr


def api_endpoint(view):
    """Map domain errors to ``{"error": ...}`` responses; anything else becomes a logged 500."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            return json_error(str(e), e.status_code)
        except Exception as e:
            logger.exception("Unhandled error in %s %s", request.method, request.path)
            if bool(current_app.config.get("DEBUG", False)):
                return json_error(f"Internal Server Error: {e}", 500)
            return json_error("Internal Server Error", 500)

    return wrapper
