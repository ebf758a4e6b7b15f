"""Bearer-token authentication for protected HTTP routes."""

import logging
from functools import wraps

from flask import current_app, g, jsonify, request

logger = logging.getLogger(__name__)


def token_required(f):
    """Decorator requiring a valid application JWT in the Authorization header.

    On success the decoded claims are stored on ``g.user_claims`` and the user
    id on ``g.user_id``. A missing token yields 401, an invalid or expired
    one 403.
    """

    @wraps(f)
    def wrapped(*args, **kwargs):
        auth_header = request.headers.get("Authorization", "")
        token = auth_header.split(" ", 1)[1].strip() if " " in auth_header else ""
        if not auth_header.lower().startswith("bearer ") or not token:
            logger.warning("missing_bearer_token path=%s", request.path)
            return jsonify({"message": "Authentication required"}), 401

        token_service = current_app.extensions.get("token_service")
        if token_service is None:
            logger.error("token_service_not_initialized")
            return jsonify({"message": "Authentication unavailable"}), 503

        try:
            claims = token_service.decode(token)
        except Exception as exc:  # jwt lib raises many types
            logger.warning("jwt_invalid_token path=%s error=%s", request.path, exc)
            return jsonify({"message": "Invalid or expired token"}), 403

        user_id = token_service.user_id_from_claims(claims)
        if not user_id:
            logger.warning("jwt_missing_user_claim path=%s", request.path)
            return jsonify({"message": "Invalid token: missing user claim"}), 403

        g.user_claims = claims
        g.user_id = user_id
        logger.debug("user_authenticated user_id=%s", user_id)
        return f(*args, **kwargs)

    return wrapped
