from datetime import date
from types import SimpleNamespace

import pytest

from app import create_app
from data_models import db, Author, Book, BookInstance, Genre


@pytest.fixture
def app(tmp_path):
    # File-backed so that worker threads of parallel.gather see the same data.
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'library.sqlite'}",
    })
    yield app
    with app.app_context():
        db.session.remove()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def seeded(app):
    """
    One author with one book (filed under Fantasy) and one available copy.
    Poetry is an unused genre; Le Guin is an author without books.
    """
    with app.app_context():
        rothfuss = Author(first_name="Patrick", family_name="Rothfuss", date_of_birth=date(1973, 6, 6))
        le_guin = Author(
            first_name="Ursula",
            family_name="Le Guin",
            date_of_birth=date(1929, 10, 21),
            date_of_death=date(2018, 1, 22),
        )
        fantasy = Genre(name="Fantasy")
        poetry = Genre(name="Poetry")
        book = Book(
            title="The Name of the Wind",
            summary="The tale of Kvothe.",
            isbn="9780756404079",
            author=rothfuss,
            genres=[fantasy],
        )
        copy = BookInstance(book=book, imprint="Gollancz, 2011", status="Available", due_back=date(2024, 1, 1))
        db.session.add_all([rothfuss, le_guin, fantasy, poetry, book, copy])
        db.session.commit()

        return SimpleNamespace(
            author_id=rothfuss.id,
            lonely_author_id=le_guin.id,
            genre_id=fantasy.id,
            unused_genre_id=poetry.id,
            book_id=book.id,
            copy_id=copy.id,
        )


@pytest.fixture
def count(app):
    def count_rows(model, **filters):
        with app.app_context():
            return model.query.filter_by(**filters).count()
    return count_rows
