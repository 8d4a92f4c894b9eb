from flask import Flask
from werkzeug.exceptions import HTTPException
from flask_jwt_extended import JWTManager
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool
from sqlalchemy.orm import sessionmaker, scoped_session
from dotenv import load_dotenv
from typing import Optional, Dict, Any
import logging

load_dotenv()

db_engine = None
SessionLocal = None
jwt = JWTManager()


def create_app(config: Optional[Dict[str, Any]] = None):
    global db_engine, SessionLocal
    from .config.settings import load_settings
    from .errors import AuthorizationError
    from .extension import EXTENSION_KEY, build_components

    app = Flask(__name__)
    app.config.update(load_settings(config))

    level = app.config['LOG_LEVEL']
    app.logger.setLevel(level)
    logging.getLogger(__name__).setLevel(level)

    # Database
    db_url = app.config['DATABASE_URL']
    if db_url.endswith(':memory:'):
        # Ensure a single shared in-memory SQLite database across all sessions
        db_engine = create_engine(
            db_url,
            echo=False,
            future=True,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        db_engine = create_engine(db_url, echo=False, future=True)
    SessionLocal = scoped_session(sessionmaker(bind=db_engine, expire_on_commit=False, autoflush=False))

    @app.teardown_appcontext
    def remove_session(exc=None):
        SessionLocal.remove()

    jwt.init_app(app)

    # Catalogs are built once here and shared read-only by every request
    app.extensions[EXTENSION_KEY] = build_components(get_db)

    from .routes.iam import iam_bp
    from .routes.passports import passports_bp
    from .routes.workflow import workflow_bp
    app.register_blueprint(iam_bp, url_prefix='/iam')
    app.register_blueprint(passports_bp)
    app.register_blueprint(workflow_bp, url_prefix='/workflow')

    @app.route('/healthz')
    def health():
        return {'status': 'ok'}

    # Unified error handler producing standardized JSON shape
    @app.errorhandler(Exception)
    def handle_errors(e):  # type: ignore
        if isinstance(e, AuthorizationError):
            payload = {
                'error': {
                    'status': e.status_code,
                    'title': e.title,
                    'detail': e.detail,
                }
            }
            return payload, e.status_code
        if isinstance(e, HTTPException):
            payload = {
                'error': {
                    'status': e.code,
                    'title': e.name,
                    'detail': e.description,
                }
            }
            return payload, e.code
        # Unhandled exception
        app.logger.exception('Unhandled exception')
        return {
            'error': {
                'status': 500,
                'title': 'Internal Server Error',
                'detail': 'Unexpected error'
            }
        }, 500

    return app


def get_db():
    return SessionLocal()
