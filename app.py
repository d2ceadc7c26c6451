import importlib
import logging
import os
import pkgutil

from flask import Blueprint, Flask

from config import settings
from utils.header_aliases import load_alias_table


def create_app() -> Flask:
    """Flask application factory."""
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = Flask(__name__)
    app.secret_key = os.getenv("SECRET_KEY", "dev")
    app.config["MAX_CONTENT_LENGTH"] = settings.MAX_UPLOAD_MB * 1024 * 1024

    # Header alias table is loaded once; a broken override file fails startup.
    app.config["ALIAS_TABLE"] = load_alias_table(settings.HEADER_ALIASES_PATH or None)

    """Registration of error handlers."""
    from middleware.handlers import register_error_handlers
    register_error_handlers(app)

    # Auto-register all blueprints defined in routes/*.py
    from routes import __path__ as routes_path

    for _, module_name, _ in pkgutil.iter_modules(routes_path):
        module = importlib.import_module(f"routes.{module_name}")
        for attr_name in dir(module):
            obj = getattr(module, attr_name)
            if isinstance(obj, Blueprint):
                app.register_blueprint(obj)

    app.logger.info(
        "Person-list importer ready (header languages: %s)",
        ", ".join(app.config["ALIAS_TABLE"].languages),
    )
    return app


if __name__ == "__main__":
    app = create_app()
    app.run(
        host="0.0.0.0",
        port=int(os.getenv("PORT", 5000)),
        debug=os.getenv("FLASK_DEBUG", "0") == "1",
        use_reloader=False,
    )
