"""
Amortization blueprint.

Endpoints for computing payment schedules and for inspecting which rate
applies to a given month.
"""

from typing import Any

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from loan_calculator.exceptions import LoanCalculatorError
from loan_calculator.services.amortization_service import AmortizationService

amortization_bp = Blueprint("amortization", __name__, url_prefix="/api")


def _service() -> AmortizationService:
    return AmortizationService(
        max_term_months=current_app.config["MAX_TERM_MONTHS"],
        default_currency=current_app.config["DEFAULT_CURRENCY"],
    )


def _validation_error(e: ValidationError) -> Any:
    details = [
        {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
        for err in e.errors()
    ]
    return jsonify({"error": "Invalid request", "details": details}), 400


@amortization_bp.route("/amortization", methods=["POST"])
def calculate_amortization() -> Any:
    """Compute the payment schedule for a loan.

    Incomplete input is not an error: the response then carries an empty
    schedule and a zero summary.

    Returns:
        JSON response with schedule and summary
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Request body must be a JSON object"}), 400

    try:
        return jsonify(_service().calculate(data)), 200

    except ValidationError as e:
        return _validation_error(e)

    except LoanCalculatorError as e:
        return jsonify({"error": str(e)}), 400

    except Exception as e:
        current_app.logger.error(f"Error computing amortization: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500


@amortization_bp.route("/rates", methods=["POST"])
def resolve_rates() -> Any:
    """Resolve the rate applied in each requested month.

    Returns:
        JSON response with monthly and annualized rates
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Request body must be a JSON object"}), 400

    try:
        return jsonify(_service().resolve_rates(data)), 200

    except ValidationError as e:
        return _validation_error(e)

    except LoanCalculatorError as e:
        return jsonify({"error": str(e)}), 400

    except Exception as e:
        current_app.logger.error(f"Error resolving rates: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500
