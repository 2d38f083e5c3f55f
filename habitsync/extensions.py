"""Flask extensions shared by the habitsync app and its services."""

from pathlib import Path

from flask_bcrypt import Bcrypt
from flask_jwt_extended import JWTManager, get_jwt_identity, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from jwt.exceptions import PyJWTError
from sqlalchemy import event

MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"


def rate_limit_key() -> str:
    """Authenticated callers are limited per user, anonymous ones per address."""
    try:
        verify_jwt_in_request(optional=True)
        identity = get_jwt_identity()
    except (JWTExtendedException, PyJWTError):
        identity = None
    return f"user:{identity}" if identity else get_remote_address()


# Committed rows stay readable for responses and events.
db = SQLAlchemy(session_options={"expire_on_commit": False})
migrate = Migrate()
jwt = JWTManager()
bcrypt = Bcrypt()
# Defaults, storage and on/off come from RATELIMIT_* in the app config.
limiter = Limiter(key_func=rate_limit_key)


def serialize_sqlite_transactions(engine) -> None:
    """Open every SQLite transaction with BEGIN IMMEDIATE.

    pysqlite defers BEGIN until the first write, so a read that guards a later
    write (the subscription lookup before a tracking insert) would hold no lock.
    Taking the database write lock up front serializes such transactions and
    lets SAVEPOINTs nest inside them.
    """

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def init_extensions(app) -> None:
    db.init_app(app)
    with app.app_context():
        for engine in db.engines.values():
            if engine.dialect.name == "sqlite":
                serialize_sqlite_transactions(engine)
    migrate.init_app(app, db, directory=str(MIGRATIONS_DIR))
    jwt.init_app(app)
    bcrypt.init_app(app)
    limiter.init_app(app)
