from flask import render_template

from controllers import catalog
from data_models import Author, Book, BookInstance, Genre
from parallel import gather


@catalog.route("/")
def index():
    """
    Summary page: document counts for every collection, queried in parallel.
    """
    (
        book_count,
        book_instance_count,
        book_instance_available_count,
        author_count,
        genre_count,
    ) = gather(
        lambda: Book.query.count(),
        lambda: BookInstance.query.count(),
        lambda: BookInstance.query.filter_by(status="Available").count(),
        lambda: Author.query.count(),
        lambda: Genre.query.count(),
    )

    return render_template(
        "index.html",
        title="Local Library Home",
        book_count=book_count,
        book_instance_count=book_instance_count,
        book_instance_available_count=book_instance_available_count,
        author_count=author_count,
        genre_count=genre_count,
    )
