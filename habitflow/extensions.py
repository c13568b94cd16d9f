"""Extension singletons, bound to the app in ``init_extensions``."""

from pathlib import Path

from flask_bcrypt import Bcrypt
from flask_jwt_extended import JWTManager
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy

MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"

# Loaded objects stay readable after commit.
db = SQLAlchemy(session_options={"expire_on_commit": False})
migrate = Migrate(directory=str(MIGRATIONS_DIR))
jwt = JWTManager()
bcrypt = Bcrypt()
# Defaults, storage and on/off come from the RATELIMIT_* config keys.
limiter = Limiter(key_func=get_remote_address)


def init_extensions(app) -> None:
    for ext in (db, jwt, bcrypt, limiter):
        ext.init_app(app)
    migrate.init_app(app, db)
