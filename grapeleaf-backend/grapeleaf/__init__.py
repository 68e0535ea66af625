# grapeleaf/__init__.py
from flask import Flask
from flask_cors import CORS
from .core.config import Config
from .core.logging_setup import configure_logging
from .api.analyze_routes import analyze_bp


def create_app(config_object=Config):
    configure_logging(getattr(config_object, "LOG_LEVEL", None))

    app = Flask(__name__)
    app.config.from_object(config_object)

    # Izinkan akses dari frontend
    CORS(app, resources={r"/api/*": {"origins": app.config.get("CORS_ORIGINS", "*")}})

    # Register blueprint untuk diagnosis
    app.register_blueprint(analyze_bp, url_prefix="/api")

    return app
