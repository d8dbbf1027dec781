from datetime import date

from flask import abort, current_app, flash, redirect, render_template, request, url_for
from sqlalchemy.orm import joinedload, load_only

from controllers import catalog
from data_models import db, STATUS_CHOICES, Book, BookInstance
from parallel import gather
from validation import to_id, validate_bookinstance


def book_titles():
    return Book.query.options(load_only(Book.title)).order_by(Book.title.asc()).all()


def echo_bookinstance(values):
    return dict(values, due_back_iso=values["due_back_raw"])


def apply_bookinstance_form(instance, values):
    instance.book_id = to_id(values["book"])
    instance.imprint = values["imprint"]
    instance.status = values["status"]
    # An empty due date means "due today", as on creation.
    instance.due_back = values["due_back"] or date.today()
    return instance


def render_bookinstance_form(title, instance, selected_book=None, errors=None, books=None):
    if books is None:
        books = book_titles()
    return render_template(
        "bookinstance_form.html",
        title=title,
        bookinstance=instance,
        book_list=books,
        status_list=STATUS_CHOICES,
        selected_book=selected_book,
        errors=errors or [],
    )


@catalog.route("/bookinstances")
def bookinstance_list():
    instances = BookInstance.query.options(joinedload(BookInstance.book)).order_by(BookInstance.id.asc()).all()
    return render_template("bookinstance_list.html", title="Book Instance List", bookinstance_list=instances)


@catalog.route("/bookinstance/<int:instance_id>")
def bookinstance_detail(instance_id):
    instance = db.session.get(BookInstance, instance_id, options=[joinedload(BookInstance.book)])
    if instance is None:
        abort(404)

    return render_template("bookinstance_detail.html", title="Book Copy", bookinstance=instance)


@catalog.route("/bookinstance/create", methods=["GET", "POST"])
def bookinstance_create():
    """
    Show the copy form, or validate and save a submitted copy.
    """
    if request.method == "GET":
        return render_bookinstance_form("Create BookInstance", None)

    form = validate_bookinstance(request.form)
    if not form.ok:
        return render_bookinstance_form(
            "Create BookInstance", echo_bookinstance(form.values), form.values["book"], form.errors
        )

    instance = apply_bookinstance_form(BookInstance(), form.values)
    db.session.add(instance)
    db.session.commit()

    current_app.logger.info("Created book instance %s", instance.id)
    flash("Book copy was added successfully.", "success")
    return redirect(instance.url)


@catalog.route("/bookinstance/<int:instance_id>/delete", methods=["GET", "POST"])
def bookinstance_delete(instance_id):
    """
    Confirm and delete a copy. Deleting a copy that no longer exists is a
    no-op that lands on the list.
    """
    instance = db.session.get(BookInstance, instance_id, options=[joinedload(BookInstance.book)])
    if instance is None:
        return redirect(url_for("catalog.bookinstance_list"))

    if request.method == "POST":
        db.session.delete(instance)
        db.session.commit()
        current_app.logger.info("Deleted book instance %s", instance_id)
        flash("Book copy was deleted.", "success")
        return redirect(url_for("catalog.bookinstance_list"))

    return render_template("bookinstance_delete.html", title="Delete BookInstance", bookinstance=instance)


@catalog.route("/bookinstance/<int:instance_id>/update", methods=["GET", "POST"])
def bookinstance_update(instance_id):
    if request.method == "GET":
        instance, books = gather(
            lambda: db.session.get(BookInstance, instance_id, options=[joinedload(BookInstance.book)]),
            book_titles,
        )
        if instance is None:
            abort(404)
        return render_bookinstance_form("Update BookInstance", instance, str(instance.book_id), books=books)

    instance = db.get_or_404(BookInstance, instance_id)
    form = validate_bookinstance(request.form)
    if not form.ok:
        return render_bookinstance_form(
            "Update BookInstance", echo_bookinstance(form.values), form.values["book"], form.errors
        )

    apply_bookinstance_form(instance, form.values)
    db.session.commit()

    current_app.logger.info("Updated book instance %s", instance.id)
    flash("Book copy was updated.", "success")
    return redirect(instance.url)
