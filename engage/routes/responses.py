"""Shared error-to-response mapping for route handlers."""

import logging

from flask import jsonify

from engage.errors import EngageError

logger = logging.getLogger(__name__)


def error_response(exc: Exception, event: str):
    """Map a controller exception to a JSON error response.

    Known errors keep their status code; anything else is a 500 that passes
    the exception text through to the client.
    """
    if isinstance(exc, EngageError):
        logger.warning("%s status=%d error=%s", event, exc.status_code, str(exc))
        return jsonify({"message": str(exc)}), exc.status_code

    logger.error("%s error=%s", event, str(exc), exc_info=True)
    return jsonify({"message": str(exc)}), 500
