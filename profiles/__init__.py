from flask import Flask

from .config import get_config
from .database import create_db_engine, create_session_factory, init_db
from .logging_config import configure_logging
from .notifications import build_notifier
from .repositories import SQLAlchemyUserRepository
from .services import UserService


def create_app(test_config=None):
    settings = get_config()
    app = Flask(__name__)

    # Load configuration from settings
    app.config.from_mapping(
        SECRET_KEY=settings.SECRET_KEY,
        DEBUG=settings.DEBUG,
        DATABASE_URL=settings.DATABASE_URL,
        DB_TIMEOUT_SECONDS=settings.DB_TIMEOUT_SECONDS,
        EVENT_WEBHOOK_URL=settings.EVENT_WEBHOOK_URL,
        EVENT_WEBHOOK_TIMEOUT=settings.EVENT_WEBHOOK_TIMEOUT,
        LOG_LEVEL=settings.LOG_LEVEL,
        LOG_FILE=settings.LOG_FILE,
        CREATE_SCHEMA=False,
    )

    if test_config:
        app.config.update(test_config)

    if not app.config.get("TESTING"):
        configure_logging(app.config["LOG_LEVEL"], app.config["LOG_FILE"])

    # The engine and session factory are the store handle; the app owns them
    engine = create_db_engine(app.config["DATABASE_URL"], debug=app.config["DEBUG"])
    session_factory = create_session_factory(engine)
    if app.config["CREATE_SCHEMA"]:
        init_db(engine)

    repository = SQLAlchemyUserRepository(session_factory)
    notifier = app.config.get("EVENT_NOTIFIER") or build_notifier(
        app.config["EVENT_WEBHOOK_URL"], timeout=app.config["EVENT_WEBHOOK_TIMEOUT"]
    )

    # attach to app for other modules to use
    app.extensions["db_engine"] = engine
    app.extensions["db_session_factory"] = session_factory
    app.extensions["user_service"] = UserService(
        repository, notifier, timeout=app.config["DB_TIMEOUT_SECONDS"]
    )

    from .routes import users_bp

    app.register_blueprint(users_bp)

    return app
