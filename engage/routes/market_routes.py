"""Prediction market and prediction routes."""

import logging

from flask import Blueprint, g, jsonify, request

from engage.controllers import MarketController
from engage.routes.responses import error_response
from engage.utils.auth_middleware import token_required

logger = logging.getLogger(__name__)


def init_market_routes(market_controller: MarketController):
    """Initialize market routes with the market controller."""
    market_bp = Blueprint("markets", __name__, url_prefix="/api")

    @market_bp.route("/prediction-markets", methods=["GET"])
    def list_markets():
        try:
            return jsonify(market_controller.list_markets()), 200
        except Exception as exc:
            return error_response(exc, "markets_fetch_failed")

    @market_bp.route("/prediction-markets", methods=["POST"])
    @token_required
    def create_market():
        data = request.get_json(silent=True) or {}
        try:
            return jsonify(market_controller.create_market(g.user_claims, data)), 200
        except Exception as exc:
            return error_response(exc, "market_create_failed")

    @market_bp.route("/predictions", methods=["POST"])
    @token_required
    def place_prediction():
        data = request.get_json(silent=True) or {}
        try:
            return jsonify(market_controller.place_prediction(g.user_id, data)), 200
        except Exception as exc:
            return error_response(exc, "prediction_failed")

    @market_bp.route("/predictions/user", methods=["GET"])
    @token_required
    def get_user_predictions():
        try:
            return jsonify(market_controller.get_user_predictions(g.user_id)), 200
        except Exception as exc:
            return error_response(exc, "predictions_fetch_failed")

    return market_bp
