from flask import abort, current_app, flash, redirect, render_template, request, url_for
from sqlalchemy.orm import joinedload, load_only, selectinload

from controllers import catalog
from data_models import db, Author, Book, BookInstance, Genre
from parallel import gather
from validation import to_id, validate_book


def all_authors():
    return Author.query.order_by(Author.family_name.asc(), Author.first_name.asc()).all()


def all_genres():
    return Genre.query.order_by(Genre.name.asc()).all()


def authors_and_genres():
    """
    Form choices: authors by family name and genres by name, fetched in parallel.
    """
    return gather(all_authors, all_genres)


def genres_by_id(values):
    ids = [i for i in (to_id(v) for v in values) if i is not None]
    if not ids:
        return []
    return Genre.query.filter(Genre.id.in_(ids)).all()


def render_book_form(title, book, selected_author=None, selected_genres=(), errors=None):
    authors, genres = authors_and_genres()
    return render_template(
        "book_form.html",
        title=title,
        book=book,
        authors=authors,
        genres=genres,
        selected_author=selected_author,
        selected_genres={str(g) for g in selected_genres},
        errors=errors or [],
    )


def apply_book_form(book, values):
    book.title = values["title"]
    book.author_id = to_id(values["author"])
    book.summary = values["summary"]
    book.isbn = values["isbn"]
    book.genres = genres_by_id(values["genre"])
    return book


def book_with_instances(book_id):
    return gather(
        lambda: db.session.get(Book, book_id, options=[joinedload(Book.author)]),
        lambda: BookInstance.query.filter_by(book_id=book_id).all(),
    )


@catalog.route("/books")
def book_list():
    """
    All books (title and author only), sorted by title.
    """
    books = (
        Book.query.options(load_only(Book.title, Book.author_id), joinedload(Book.author))
        .order_by(Book.title.asc())
        .all()
    )
    return render_template("book_list.html", title="Book List", book_list=books)


@catalog.route("/book/<int:book_id>")
def book_detail(book_id):
    """
    Detail page for a book, with its author, genres and copies.
    """
    book, instances = gather(
        lambda: db.session.get(
            Book, book_id, options=[joinedload(Book.author), selectinload(Book.genres)]
        ),
        lambda: BookInstance.query.filter_by(book_id=book_id).all(),
    )
    if book is None:
        abort(404)

    return render_template("book_detail.html", title=book.title, book=book, book_instances=instances)


@catalog.route("/book/create", methods=["GET", "POST"])
def book_create():
    """
    Show the empty book form, or validate and save a submitted one.
    """
    if request.method == "GET":
        return render_book_form("Create Book", None)

    form = validate_book(request.form)
    if not form.ok:
        return render_book_form(
            "Create Book", form.values, form.values["author"], form.values["genre"], form.errors
        )

    book = apply_book_form(Book(), form.values)
    db.session.add(book)
    db.session.commit()

    current_app.logger.info("Created book %s", book.id)
    flash(f"Book '{book.title}' was added successfully.", "success")
    return redirect(book.url)


@catalog.route("/book/<int:book_id>/delete", methods=["GET", "POST"])
def book_delete(book_id):
    """
    Confirm and delete a book. Refused while copies of it still exist.
    """
    book, instances = book_with_instances(book_id)
    if book is None:
        return redirect(url_for("catalog.book_list"))

    if request.method == "POST":
        if not instances:
            target = db.session.get(Book, book_id)
            if target is not None:
                db.session.delete(target)
                db.session.commit()
            current_app.logger.info("Deleted book %s", book_id)
            flash(f"Book '{book.title}' was deleted.", "success")
            return redirect(url_for("catalog.book_list"))
        current_app.logger.info("Refused to delete book %s: %d copies remain", book_id, len(instances))

    return render_template("book_delete.html", title="Delete Book", book=book, book_instances=instances)


@catalog.route("/book/<int:book_id>/update", methods=["GET", "POST"])
def book_update(book_id):
    """
    Show the book form prefilled, or validate and apply a submitted update.
    """
    if request.method == "GET":
        book, authors, genres = gather(
            lambda: db.session.get(
                Book, book_id, options=[joinedload(Book.author), selectinload(Book.genres)]
            ),
            all_authors,
            all_genres,
        )
        if book is None:
            abort(404)
        return render_template(
            "book_form.html",
            title="Update Book",
            book=book,
            authors=authors,
            genres=genres,
            selected_author=str(book.author_id),
            selected_genres={str(g.id) for g in book.genres},
            errors=[],
        )

    book = db.get_or_404(Book, book_id)
    form = validate_book(request.form)
    if not form.ok:
        return render_book_form(
            "Update Book", form.values, form.values["author"], form.values["genre"], form.errors
        )

    apply_book_form(book, form.values)
    db.session.commit()

    current_app.logger.info("Updated book %s", book.id)
    flash(f"Book '{book.title}' was updated.", "success")
    return redirect(book.url)
