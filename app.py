"""
Local Library - a catalog of books, authors, genres and book copies built
with Flask and SQLAlchemy.

Features:
- List, detail, create, update and delete pages for every entity
- Summary page with collection counts (queried in parallel)
- Form validation with re-rendering of rejected input
- Deletes refused while dependent records still exist
"""

import logging
import os

from flask import Flask, redirect, render_template, url_for
from sqlalchemy.exc import SQLAlchemyError

from config import Config
from controllers import catalog
from data_models import db


def ensure_sqlite_dir(uri: str) -> None:
    """
    Create the parent directory of a file-backed SQLite database.
    """
    prefix = "sqlite:///"
    if not uri.startswith(prefix):
        return
    path = uri[len(prefix):]
    if path and path != ":memory:":
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(404)
    def not_found(error):
        return render_template("error.html", title="Not Found", message="Page not found.", status=404), 404

    @app.errorhandler(SQLAlchemyError)
    def store_failure(error):
        app.logger.exception("Database error")
        db.session.rollback()
        return render_template(
            "error.html", title="Error", message="The catalog could not be read or updated.", status=500
        ), 500


def create_app(test_config=None):
    """
    Application factory.

    Args:
        test_config (dict): settings applied on top of ``Config``.
    """
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.from_mapping(test_config)

    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app.logger.setLevel(app.config["LOG_LEVEL"])

    ensure_sqlite_dir(app.config["SQLALCHEMY_DATABASE_URI"])
    db.init_app(app)

    app.register_blueprint(catalog)
    register_error_handlers(app)

    @app.route("/")
    def home():
        return redirect(url_for("catalog.index"))

    with app.app_context():
        db.create_all()

    return app


if __name__ == "__main__":
    create_app().run(debug=True)
