from flask import Flask
from werkzeug.exceptions import HTTPException
from flask_jwt_extended import JWTManager
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool
from sqlalchemy.orm import sessionmaker, scoped_session
from dotenv import load_dotenv
from typing import Optional, Dict, Any
import logging
import os

load_dotenv()

db_engine = None
SessionLocal = None
jwt = JWTManager()

SESSION_EXPIRED = {'success': False, 'message': 'Session expired'}


def create_app(config: Optional[Dict[str, Any]] = None):
    global db_engine, SessionLocal
    app = Flask(__name__)

    app.config['JWT_SECRET_KEY'] = os.getenv('JWT_SECRET_KEY', 'dev-secret')
    app.config['DATABASE_URL'] = os.getenv('DATABASE_URL', 'sqlite:///dev.db')
    app.config['LOG_LEVEL'] = os.getenv('LOG_LEVEL', 'INFO')
    app.config['CALENDAR_MAX_WORKERS'] = os.getenv('CALENDAR_MAX_WORKERS', '1')
    app.config['CALENDAR_FETCH_TIMEOUT'] = os.getenv('CALENDAR_FETCH_TIMEOUT', '30')
    app.config['CALENDAR_ISOLATE_FAILURES'] = os.getenv('CALENDAR_ISOLATE_FAILURES', 'false')
    app.config['CALENDAR_SKIP_STALE_KEYS'] = os.getenv('CALENDAR_SKIP_STALE_KEYS', 'false')

    if config:
        # allow tests or callers to override default config values
        app.config.update(config)

    from .config.calendar import load_calendar_settings
    # fail at startup rather than on the first feed request
    app.config['CALENDAR_SETTINGS'] = load_calendar_settings(app.config)

    logging.getLogger('p2p').setLevel(app.config['LOG_LEVEL'])
    app.logger.setLevel(app.config['LOG_LEVEL'])

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

    jwt.init_app(app)

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):  # type: ignore
        return SESSION_EXPIRED, 401

    @jwt.invalid_token_loader
    def invalid_token(reason):  # type: ignore
        return SESSION_EXPIRED, 401

    from .routes.calendar import calendar_bp  # calendar feed
    from .routes.account import account_bp  # permissions + notifications
    app.register_blueprint(calendar_bp, url_prefix='/calendar')
    app.register_blueprint(account_bp, url_prefix='/account')

    @app.route('/healthz')
    def health():
        return {'status': 'ok'}

    @app.teardown_appcontext
    def remove_session(exc):  # type: ignore
        release_db()

    from .errors import SessionExpired

    @app.errorhandler(SessionExpired)
    def handle_session_expired(e):  # type: ignore
        return SESSION_EXPIRED, 401

    # Unified error handler producing standardized JSON shape
    @app.errorhandler(Exception)
    def handle_errors(e):  # type: ignore
        if isinstance(e, HTTPException):
            payload = {
                'error': {
                    'status': e.code,
                    'title': e.name,
                    'detail': e.description,
                }
            }
            return payload, e.code
        # Lookup failures land here too; never echo data-access text to the caller
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


def release_db():
    """Drop the calling thread's scoped session (request teardown and feed workers)."""
    if SessionLocal is not None:
        SessionLocal.remove()
