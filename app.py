import logging

from flask import Flask
from dotenv import load_dotenv

load_dotenv()

from config import Config  # noqa: E402  (load_dotenv needs to run first)
from extensions import db  # noqa: E402  (load_dotenv needs to run first)


def create_app(test_config=None) -> Flask:
    """Application factory for the user administration backend.

    ``test_config`` is either a config class or a mapping applied on top of
    ``Config`` before the extensions are bound.
    """

    app = Flask(__name__)
    app.config.from_object(Config)
    if isinstance(test_config, dict):
        app.config.from_mapping(test_config)
    elif test_config is not None:
        app.config.from_object(test_config)

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # init extensions
    db.init_app(app)

    # blueprints
    from modules.roles import bp as roles_bp
    from modules.users import bp as users_bp

    app.register_blueprint(roles_bp)
    app.register_blueprint(users_bp)

    from ui_routes import ui
    app.register_blueprint(ui)

    # DB
    with app.app_context():
        # models must be imported before create_all()
        from modules.roles import models as roles_models  # noqa: F401
        from modules.users import models as users_models  # noqa: F401

        db.create_all()

    return app

if __name__ == "__main__":
    app = create_app()
    app.run(debug=True)
