"""
ORM models for the local library catalog: Author, Genre, Book and BookInstance.

Derived display values (names, URLs, formatted dates) are plain functions of the
stored columns and are exposed as read-only properties, so they are computed at
render time and never persisted.
"""

from datetime import date

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


STATUS_CHOICES = ("Maintenance", "Available", "Loaned", "Reserved")
DEFAULT_STATUS = "Maintenance"


def format_iso_date(value) -> str:
    """
    Format a date as 'YYYY-MM-DD' for <input type="date">. Empty for None.
    """
    return value.isoformat() if value else ""


def format_medium_date(value) -> str:
    """
    Format a date the way it is shown on pages, e.g. 'Oct 6, 2024'. Empty for None.
    """
    if not value:
        return ""
    return f"{value:%b} {value.day}, {value.year}"


def author_full_name(first_name, family_name) -> str:
    """
    'family_name, first_name', or an empty string when either part is missing.
    """
    if first_name and family_name:
        return f"{family_name}, {first_name}"
    return ""


def author_lifespan(date_of_birth, date_of_death) -> str:
    parts = []
    if date_of_birth:
        parts.append("Born: " + format_medium_date(date_of_birth))
    if date_of_death:
        parts.append("Died: " + format_medium_date(date_of_death))
    return " - ".join(parts)


def author_url(author_id) -> str:
    return f"/catalog/author/{author_id}"


def genre_url(genre_id) -> str:
    return f"/catalog/genre/{genre_id}"


def book_url(book_id) -> str:
    return f"/catalog/book/{book_id}"


def bookinstance_url(instance_id) -> str:
    return f"/catalog/bookinstance/{instance_id}"


# Book <-> Genre reference set. SQLite leaves these keys unenforced.
book_genres = db.Table(
    "book_genres",
    db.Column("book_id", db.Integer, db.ForeignKey("books.id"), primary_key=True),
    db.Column("genre_id", db.Integer, db.ForeignKey("genres.id"), primary_key=True),
)


class Author(db.Model):
    """
    Author with optional life dates.
    """
    __tablename__ = "authors"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    first_name = db.Column(db.String(100), nullable=False)
    family_name = db.Column(db.String(100), nullable=False)
    date_of_birth = db.Column(db.Date, nullable=True)
    date_of_death = db.Column(db.Date, nullable=True)

    @property
    def name(self):
        return author_full_name(self.first_name, self.family_name)

    @property
    def url(self):
        return author_url(self.id)

    @property
    def dob_formatted(self):
        return format_iso_date(self.date_of_birth)

    @property
    def dod_formatted(self):
        return format_iso_date(self.date_of_death)

    @property
    def lifespan(self):
        return author_lifespan(self.date_of_birth, self.date_of_death)

    def __repr__(self):
        return f"Author(id = {self.id}, name = {self.name})"

    def __str__(self):
        return self.name


class Genre(db.Model):
    __tablename__ = "genres"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    name = db.Column(db.String(100), nullable=False)

    @property
    def url(self):
        return genre_url(self.id)

    def __repr__(self):
        return f"<Genre id={self.id} name='{self.name}'>"

    def __str__(self):
        return self.name


class Book(db.Model):
    """
    Book referencing one author and any number of genres.
    """
    __tablename__ = "books"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    title = db.Column(db.String(200), nullable=False)
    summary = db.Column(db.Text, nullable=False)
    isbn = db.Column(db.String(20), nullable=False)

    author_id = db.Column(db.Integer, db.ForeignKey("authors.id"), nullable=False)
    author = db.relationship("Author", lazy="select")

    genres = db.relationship("Genre", secondary=book_genres, lazy="select", order_by="Genre.name")

    @property
    def url(self):
        return book_url(self.id)

    def __repr__(self):
        return f"<Book id={self.id} title='{self.title}'>"

    def __str__(self):
        return self.title


class BookInstance(db.Model):
    """
    A physical copy of a book, with its lending status.
    """
    __tablename__ = "bookinstances"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    imprint = db.Column(db.String(200), nullable=False)
    status = db.Column(
        db.Enum(*STATUS_CHOICES, name="bookinstance_status", native_enum=False),
        nullable=False,
        default=DEFAULT_STATUS,
    )
    due_back = db.Column(db.Date, nullable=False, default=date.today)

    book_id = db.Column(db.Integer, db.ForeignKey("books.id"), nullable=False)
    book = db.relationship("Book", lazy="select")

    @property
    def url(self):
        return bookinstance_url(self.id)

    @property
    def due_back_formatted(self):
        return format_medium_date(self.due_back)

    @property
    def due_back_iso(self):
        return format_iso_date(self.due_back)

    def __repr__(self):
        return f"<BookInstance id={self.id} status='{self.status}'>"

    def __str__(self):
        return self.imprint
