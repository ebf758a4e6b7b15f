"""Task catalogue and user task progress routes."""

import logging

from flask import Blueprint, g, jsonify, request

from engage.controllers import TaskController
from engage.routes.responses import error_response
from engage.utils.auth_middleware import token_required

logger = logging.getLogger(__name__)


def init_task_routes(task_controller: TaskController):
    """Initialize task routes with the task controller."""
    task_bp = Blueprint("tasks", __name__, url_prefix="/api")

    @task_bp.route("/tasks", methods=["GET"])
    def list_tasks():
        try:
            return jsonify(task_controller.list_tasks()), 200
        except Exception as exc:
            return error_response(exc, "tasks_fetch_failed")

    @task_bp.route("/tasks", methods=["POST"])
    @token_required
    def create_task():
        data = request.get_json(silent=True) or {}
        try:
            return jsonify(task_controller.create_task(g.user_claims, data)), 200
        except Exception as exc:
            return error_response(exc, "task_create_failed")

    @task_bp.route("/tasks/<task_id>/start", methods=["POST"])
    @token_required
    def start_task(task_id):
        try:
            return jsonify(task_controller.start_task(g.user_id, task_id)), 200
        except Exception as exc:
            return error_response(exc, "task_start_failed")

    @task_bp.route("/user-tasks/<user_task_id>", methods=["PATCH"])
    @token_required
    def update_user_task(user_task_id):
        data = request.get_json(silent=True) or {}
        try:
            return jsonify(task_controller.update_progress(g.user_id, user_task_id, data)), 200
        except Exception as exc:
            return error_response(exc, "user_task_update_failed")

    @task_bp.route("/user-tasks", methods=["GET"])
    @token_required
    def get_user_tasks():
        try:
            return jsonify(task_controller.get_user_tasks(g.user_id)), 200
        except Exception as exc:
            return error_response(exc, "user_tasks_fetch_failed")

    return task_bp
