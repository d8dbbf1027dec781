import os

from dotenv import load_dotenv

load_dotenv()

basedir = os.path.abspath(os.path.dirname(__file__))


class Config:
    # For flash messages; override in production.
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

    SQLALCHEMY_DATABASE_URI = os.getenv(
        "DATABASE_URL",
        f"sqlite:///{os.path.join(basedir, 'data/library.sqlite')}",
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Upper bound on concurrent read queries issued by one request.
    QUERY_MAX_WORKERS = int(os.getenv("QUERY_MAX_WORKERS", "5"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
