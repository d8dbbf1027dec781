"""
Form validation for the catalog views.

Each ``validate_*`` function takes the submitted form (a werkzeug ``MultiDict``
or any plain mapping) and returns a ``FormResult``: the cleaned values plus the
list of field errors. A result without errors is ready to be written; one with
errors carries the cleaned input back to the form.
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime

from data_models import DEFAULT_STATUS, STATUS_CHOICES


@dataclass
class FieldError:
    field: str
    msg: str


@dataclass
class FormResult:
    values: dict
    errors: list = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def error_for(self, name):
        return next((e.msg for e in self.errors if e.field == name), None)


# Comments, and tags opened by "<" followed by a letter, "/" or "!".
TAG_RE = re.compile(r"<!--.*?-->|<[/!]?[A-Za-z][^<>]*>", re.DOTALL)


def clean_text(value) -> str:
    """
    Trim a submitted value and strip any markup tags from it.

    Entities, a lone "<" or ">" and inner whitespace are kept as submitted.
    """
    if value is None:
        return ""
    return TAG_RE.sub("", str(value)).strip()


def to_id(value):
    """
    Convert a submitted reference to an integer identity, None when malformed.
    """
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def as_list(form, name) -> list:
    """
    Read a multi-valued field: absent gives [], a single value gives [value].
    """
    if hasattr(form, "getlist"):
        return list(form.getlist(name))
    value = form.get(name)
    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return list(value)
    return [value]


def parse_iso_date(value):
    """
    Parse an ISO-8601 date ('YYYY-MM-DD', a full timestamp is also accepted).

    Returns:
        datetime.date or None for an empty value.

    Raises:
        ValueError: the value is not an ISO-8601 date.
    """
    value = (value or "").strip()
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()


def _required(values, errors, name, msg, min_length=1):
    if len(values[name]) < min_length:
        errors.append(FieldError(name, msg))


def _max_length(values, errors, name, msg, max_length):
    if len(values[name]) > max_length:
        errors.append(FieldError(name, msg))


def _reference(values, errors, name, msg):
    if values[name] and to_id(values[name]) is None:
        errors.append(FieldError(name, msg))


def _optional_date(form, values, errors, name, msg):
    raw = clean_text(form.get(name))
    try:
        values[name] = parse_iso_date(raw)
    except ValueError:
        values[name] = None
        errors.append(FieldError(name, msg))
    # Echo back what the user typed so the form can be corrected.
    values[name + "_raw"] = raw


def validate_genre(form) -> FormResult:
    values = {"name": clean_text(form.get("name"))}
    errors = []
    _required(values, errors, "name", "Genre name must contain at least 3 characters", min_length=3)
    return FormResult(values, errors)


def validate_author(form) -> FormResult:
    values = {
        "first_name": clean_text(form.get("first_name")),
        "family_name": clean_text(form.get("family_name")),
    }
    errors = []
    _required(values, errors, "first_name", "First name must be specified.")
    _max_length(values, errors, "first_name", "First name must be at most 100 characters.", 100)
    _required(values, errors, "family_name", "Family name must be specified.")
    _max_length(values, errors, "family_name", "Family name must be at most 100 characters.", 100)
    _optional_date(form, values, errors, "date_of_birth", "Invalid date of birth.")
    _optional_date(form, values, errors, "date_of_death", "Invalid date of death.")
    return FormResult(values, errors)


def validate_book(form) -> FormResult:
    values = {
        "title": clean_text(form.get("title")),
        "author": clean_text(form.get("author")),
        "summary": clean_text(form.get("summary")),
        "isbn": clean_text(form.get("isbn")),
        "genre": [g for g in (clean_text(g) for g in as_list(form, "genre")) if g],
    }
    errors = []
    _required(values, errors, "title", "Title must not be empty.")
    _required(values, errors, "author", "Author must not be empty.")
    _reference(values, errors, "author", "Invalid author.")
    _required(values, errors, "summary", "Summary must not be empty.")
    _required(values, errors, "isbn", "ISBN must not be empty.")
    return FormResult(values, errors)


def validate_bookinstance(form) -> FormResult:
    values = {
        "book": clean_text(form.get("book")),
        "imprint": clean_text(form.get("imprint")),
        "status": clean_text(form.get("status")) or DEFAULT_STATUS,
    }
    errors = []
    _required(values, errors, "book", "Book must be specified.")
    _reference(values, errors, "book", "Invalid book.")
    _required(values, errors, "imprint", "Imprint must be specified.")
    if values["status"] not in STATUS_CHOICES:
        errors.append(FieldError("status", "Invalid status."))
    _optional_date(form, values, errors, "due_back", "Invalid date.")
    return FormResult(values, errors)
