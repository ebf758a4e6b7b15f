"""Registration and login routes."""

import logging

from flask import Blueprint, jsonify, request

from engage.controllers import AuthController
from engage.routes.responses import error_response

logger = logging.getLogger(__name__)


def init_auth_routes(auth_controller: AuthController):
    """Initialize auth routes with the auth controller."""
    auth_bp = Blueprint("auth", __name__, url_prefix="/api")

    @auth_bp.route("/register", methods=["POST"])
    def register():
        data = request.get_json(silent=True) or {}
        try:
            return jsonify(auth_controller.register(data)), 200
        except Exception as exc:
            return error_response(exc, "register_failed")

    @auth_bp.route("/login", methods=["POST"])
    def login():
        data = request.get_json(silent=True) or {}
        try:
            return jsonify(auth_controller.login(data)), 200
        except Exception as exc:
            return error_response(exc, "login_failed")

    return auth_bp
