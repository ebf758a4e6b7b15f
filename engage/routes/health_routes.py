"""Health check routes."""

import logging

from flask import Blueprint, jsonify

logger = logging.getLogger(__name__)

SERVICE_NAME = "engage-backend"
SERVICE_VERSION = "1.0.0"


def init_health_routes(store, registry):
    """Initialize health routes reporting store size and live connections."""
    health_bp = Blueprint("health", __name__, url_prefix="/api")

    @health_bp.route("/health", methods=["GET"])
    def health():
        """Basic health check - always healthy while the process serves requests."""
        logger.debug("health_check_called")
        return jsonify(
            {
                "status": "ok",
                "service": SERVICE_NAME,
                "version": SERVICE_VERSION,
                "store": store.stats(),
                "connections": len(registry),
            }
        ), 200

    return health_bp
