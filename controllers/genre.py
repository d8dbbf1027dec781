from flask import abort, current_app, flash, redirect, render_template, request, url_for

from controllers import catalog
from data_models import db, Book, Genre
from parallel import gather
from validation import validate_genre


def genre_with_books(genre_id):
    return gather(
        lambda: db.session.get(Genre, genre_id),
        lambda: Book.query.filter(Book.genres.any(Genre.id == genre_id)).order_by(Book.title.asc()).all(),
    )


def find_genre_by_name(name):
    """
    Case-insensitive lookup of a genre by name.

    Compared with str.casefold, since SQLite's lower() only folds ASCII.
    """
    key = name.casefold()
    return next((g for g in Genre.query.order_by(Genre.id.asc()) if g.name.casefold() == key), None)


@catalog.route("/genres")
def genre_list():
    genres = Genre.query.order_by(Genre.name.asc()).all()
    return render_template("genre_list.html", title="Genre List", genre_list=genres)


@catalog.route("/genre/<int:genre_id>")
def genre_detail(genre_id):
    """
    Detail page for a genre and the books filed under it.
    """
    genre, books = genre_with_books(genre_id)
    if genre is None:
        abort(404)

    return render_template("genre_detail.html", title="Genre Detail", genre=genre, genre_books=books)


@catalog.route("/genre/create", methods=["GET", "POST"])
def genre_create():
    """
    Add a genre. Submitting a name that already exists (ignoring case)
    redirects to the existing genre instead of creating a duplicate.
    """
    if request.method == "GET":
        return render_template("genre_form.html", title="Create Genre", genre=None, errors=[])

    form = validate_genre(request.form)
    if not form.ok:
        return render_template("genre_form.html", title="Create Genre", genre=form.values, errors=form.errors)

    existing = find_genre_by_name(form.values["name"])
    if existing is not None:
        current_app.logger.info("Genre '%s' already exists as %s", form.values["name"], existing.id)
        return redirect(existing.url)

    genre = Genre(name=form.values["name"])
    db.session.add(genre)
    db.session.commit()

    current_app.logger.info("Created genre %s", genre.id)
    flash(f"Genre '{genre.name}' was added successfully.", "success")
    return redirect(genre.url)


@catalog.route("/genre/<int:genre_id>/delete", methods=["GET", "POST"])
def genre_delete(genre_id):
    """
    Delete a genre. Refused while any book is still filed under it.
    """
    genre, books = genre_with_books(genre_id)
    if genre is None:
        return redirect(url_for("catalog.genre_list"))

    if request.method == "POST":
        if not books:
            target = db.session.get(Genre, genre_id)
            if target is not None:
                db.session.delete(target)
                db.session.commit()
            current_app.logger.info("Deleted genre %s", genre_id)
            flash(f"Genre '{genre.name}' was deleted.", "success")
            return redirect(url_for("catalog.genre_list"))
        current_app.logger.info("Refused to delete genre %s: %d books remain", genre_id, len(books))

    return render_template("genre_delete.html", title="Delete Genre", genre=genre, genre_books=books)


@catalog.route("/genre/<int:genre_id>/update", methods=["GET", "POST"])
def genre_update(genre_id):
    genre = db.get_or_404(Genre, genre_id)

    if request.method == "GET":
        return render_template("genre_form.html", title="Update Genre", genre=genre, errors=[])

    form = validate_genre(request.form)
    if not form.ok:
        return render_template("genre_form.html", title="Update Genre", genre=form.values, errors=form.errors)

    genre.name = form.values["name"]
    db.session.commit()

    current_app.logger.info("Updated genre %s", genre.id)
    flash(f"Genre '{genre.name}' was updated.", "success")
    return redirect(genre.url)
