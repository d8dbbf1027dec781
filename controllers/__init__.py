"""
Catalog views. Every controller module registers its routes on ``catalog``.
"""

from flask import Blueprint

catalog = Blueprint("catalog", __name__, url_prefix="/catalog")

from controllers import home, book, author, genre, bookinstance  # noqa: E402,F401
