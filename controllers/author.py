from flask import abort, current_app, flash, redirect, render_template, request, url_for

from controllers import catalog
from data_models import db, Author, Book
from parallel import gather
from validation import validate_author


def author_with_books(author_id):
    return gather(
        lambda: db.session.get(Author, author_id),
        lambda: Book.query.filter_by(author_id=author_id).order_by(Book.title.asc()).all(),
    )


def echo_author(values):
    """
    Shape rejected form input like an Author for the form template.
    """
    return dict(
        values,
        dob_formatted=values["date_of_birth_raw"],
        dod_formatted=values["date_of_death_raw"],
    )


def apply_author_form(author, values):
    author.first_name = values["first_name"]
    author.family_name = values["family_name"]
    author.date_of_birth = values["date_of_birth"]
    author.date_of_death = values["date_of_death"]
    return author


@catalog.route("/authors")
def author_list():
    authors = Author.query.order_by(Author.family_name.asc(), Author.first_name.asc()).all()
    return render_template("author_list.html", title="Author List", author_list=authors)


@catalog.route("/author/<int:author_id>")
def author_detail(author_id):
    """
    Show an author detail page (including their books).
    """
    author, books = author_with_books(author_id)
    if author is None:
        abort(404)

    return render_template("author_detail.html", title="Author Detail", author=author, author_books=books)


@catalog.route("/author/create", methods=["GET", "POST"])
def author_create():
    """
    Add a new author.
    """
    if request.method == "GET":
        return render_template("author_form.html", title="Create Author", author=None, errors=[])

    form = validate_author(request.form)
    if not form.ok:
        return render_template(
            "author_form.html", title="Create Author", author=echo_author(form.values), errors=form.errors
        )

    author = apply_author_form(Author(), form.values)
    db.session.add(author)
    db.session.commit()

    current_app.logger.info("Created author %s", author.id)
    flash(f"Author '{author.name}' was added successfully.", "success")
    return redirect(author.url)


@catalog.route("/author/<int:author_id>/delete", methods=["GET", "POST"])
def author_delete(author_id):
    """
    Delete an author. Refused while any book still references them.
    """
    author, books = author_with_books(author_id)
    if author is None:
        return redirect(url_for("catalog.author_list"))

    if request.method == "POST":
        if not books:
            target = db.session.get(Author, author_id)
            if target is not None:
                db.session.delete(target)
                db.session.commit()
            current_app.logger.info("Deleted author %s", author_id)
            flash(f"Author '{author.name}' was deleted.", "success")
            return redirect(url_for("catalog.author_list"))
        current_app.logger.info("Refused to delete author %s: %d books remain", author_id, len(books))

    return render_template("author_delete.html", title="Delete Author", author=author, author_books=books)


@catalog.route("/author/<int:author_id>/update", methods=["GET", "POST"])
def author_update(author_id):
    author = db.get_or_404(Author, author_id)

    if request.method == "GET":
        return render_template("author_form.html", title="Update Author", author=author, errors=[])

    form = validate_author(request.form)
    if not form.ok:
        return render_template(
            "author_form.html", title="Update Author", author=echo_author(form.values), errors=form.errors
        )

    apply_author_form(author, form.values)
    db.session.commit()

    current_app.logger.info("Updated author %s", author.id)
    flash(f"Author '{author.name}' was updated.", "success")
    return redirect(author.url)
