"""User profile, wallet, leaderboard, achievement and reward routes."""

import logging

from flask import Blueprint, g, jsonify, request

from engage.controllers import UserController
from engage.routes.responses import error_response
from engage.utils.auth_middleware import token_required
from engage.utils.validation import clamp_limit

logger = logging.getLogger(__name__)


def init_user_routes(user_controller: UserController):
    """Initialize user routes with the user controller."""
    user_bp = Blueprint("user", __name__, url_prefix="/api")

    @user_bp.route("/user/profile", methods=["GET"])
    @token_required
    def get_profile():
        try:
            return jsonify(user_controller.get_profile(g.user_id)), 200
        except Exception as exc:
            return error_response(exc, "profile_fetch_failed")

    @user_bp.route("/user/wallet", methods=["PATCH"])
    @token_required
    def update_wallet():
        data = request.get_json(silent=True) or {}
        try:
            return jsonify(user_controller.update_wallet(g.user_id, data)), 200
        except Exception as exc:
            return error_response(exc, "wallet_update_failed")

    @user_bp.route("/leaderboard", methods=["GET"])
    def get_leaderboard():
        try:
            limit = clamp_limit(request.args.get("limit"))
            return jsonify(user_controller.get_leaderboard(limit)), 200
        except Exception as exc:
            return error_response(exc, "leaderboard_fetch_failed")

    @user_bp.route("/achievements", methods=["GET"])
    def list_achievements():
        try:
            return jsonify(user_controller.list_achievements()), 200
        except Exception as exc:
            return error_response(exc, "achievements_fetch_failed")

    @user_bp.route("/user-achievements", methods=["GET"])
    @token_required
    def get_user_achievements():
        try:
            return jsonify(user_controller.get_user_achievements(g.user_id)), 200
        except Exception as exc:
            return error_response(exc, "user_achievements_fetch_failed")

    @user_bp.route("/rewards", methods=["GET"])
    @token_required
    def get_rewards():
        try:
            return jsonify(user_controller.get_user_rewards(g.user_id)), 200
        except Exception as exc:
            return error_response(exc, "rewards_fetch_failed")

    return user_bp
