"""Loan Calculator Flask Application Factory."""

from flask import Flask

from loan_calculator.config import get_global_settings


def create_app() -> Flask:
    """Create and configure the Flask application.

    Returns:
        Flask: Configured Flask application instance
    """
    app = Flask(__name__)

    # Configuration from Pydantic Settings
    settings = get_global_settings()
    app.config["SECRET_KEY"] = settings.secret_key
    app.config["DEBUG"] = settings.app_env == "development"
    app.config["TESTING"] = settings.app_env == "testing"
    app.config["DEFAULT_CURRENCY"] = settings.default_currency
    app.config["MAX_TERM_MONTHS"] = settings.max_term_months
    app.logger.setLevel(settings.log_level)

    # Register blueprints
    from loan_calculator.blueprints.amortization import amortization_bp
    from loan_calculator.blueprints.health import health_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(amortization_bp)

    return app
