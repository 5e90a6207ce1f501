"""Health check blueprint."""

from flask import Blueprint, Response, jsonify

health_bp = Blueprint("health", __name__)


@health_bp.route("/healthz")
def health_check() -> Response:
    """Report that the calculator service is up."""
    return jsonify({"status": "ok", "service": "loan-calculator"})
