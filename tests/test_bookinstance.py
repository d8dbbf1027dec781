from datetime import date

from data_models import db, BookInstance


def test_list_resolves_book(client, seeded):
    page = client.get("/catalog/bookinstances").get_data(as_text=True)
    assert "The Name of the Wind : Gollancz, 2011" in page


def test_detail(client, seeded):
    response = client.get(f"/catalog/bookinstance/{seeded.copy_id}")
    assert response.status_code == 200
    page = response.get_data(as_text=True)
    assert "The Name of the Wind" in page
    assert "Available" in page


def test_detail_missing_is_404(client):
    response = client.get("/catalog/bookinstance/999")
    assert response.status_code == 404
    assert "Page not found." in response.get_data(as_text=True)


def test_create_form_lists_books_and_statuses(client, seeded):
    page = client.get("/catalog/bookinstance/create").get_data(as_text=True)
    assert "The Name of the Wind" in page
    for status in ("Maintenance", "Available", "Loaned", "Reserved"):
        assert f'<option value="{status}"' in page


def test_create_saves_and_redirects(app, client, seeded):
    response = client.post(
        "/catalog/bookinstance/create",
        data={"book": str(seeded.book_id), "imprint": "DAW, 2007", "status": "Loaned", "due_back": "2025-05-01"},
    )
    assert response.status_code == 302
    with app.app_context():
        copy = BookInstance.query.filter_by(imprint="DAW, 2007").one()
        assert response.headers["Location"] == copy.url
        assert copy.status == "Loaned"
        assert copy.due_back == date(2025, 5, 1)


def test_create_defaults(app, client, seeded):
    client.post("/catalog/bookinstance/create", data={"book": str(seeded.book_id), "imprint": "DAW, 2007"})
    with app.app_context():
        copy = BookInstance.query.filter_by(imprint="DAW, 2007").one()
        assert copy.status == "Maintenance"
        assert copy.due_back == date.today()


def test_create_bad_date_keeps_selected_book(client, seeded, count):
    response = client.post(
        "/catalog/bookinstance/create",
        data={"book": str(seeded.book_id), "imprint": "DAW, 2007", "status": "Available", "due_back": "not-a-date"},
    )
    assert response.status_code == 200
    page = response.get_data(as_text=True)
    assert "Invalid date." in page
    assert f'<option value="{seeded.book_id}" selected>' in page
    assert 'value="not-a-date"' in page
    assert count(BookInstance) == 1


def test_delete_confirm_and_delete(app, client, seeded):
    confirm = client.get(f"/catalog/bookinstance/{seeded.copy_id}/delete")
    assert "Do you really want to delete this BookInstance?" in confirm.get_data(as_text=True)

    response = client.post(f"/catalog/bookinstance/{seeded.copy_id}/delete")
    assert response.status_code == 302
    assert response.headers["Location"] == "/catalog/bookinstances"
    with app.app_context():
        assert db.session.get(BookInstance, seeded.copy_id) is None


def test_delete_missing_is_a_no_op(client, seeded, count):
    for method in (client.get, client.post):
        response = method("/catalog/bookinstance/999/delete")
        assert response.status_code == 302
        assert response.headers["Location"] == "/catalog/bookinstances"
    assert count(BookInstance) == 1


def test_update_form_preselects_book(client, seeded):
    page = client.get(f"/catalog/bookinstance/{seeded.copy_id}/update").get_data(as_text=True)
    assert f'<option value="{seeded.book_id}" selected>' in page
    assert '<option value="Available" selected>' in page
    assert 'value="2024-01-01"' in page


def test_update_keeps_identity(app, client, seeded, count):
    response = client.post(
        f"/catalog/bookinstance/{seeded.copy_id}/update",
        data={"book": str(seeded.book_id), "imprint": "Gollancz, 2012", "status": "Reserved", "due_back": "2025-02-03"},
    )
    assert response.status_code == 302
    assert response.headers["Location"] == f"/catalog/bookinstance/{seeded.copy_id}"
    assert count(BookInstance) == 1
    with app.app_context():
        copy = db.session.get(BookInstance, seeded.copy_id)
        assert copy.imprint == "Gollancz, 2012"
        assert copy.status == "Reserved"
        assert copy.due_back == date(2025, 2, 3)


def test_update_invalid_is_rerendered(app, client, seeded):
    response = client.post(
        f"/catalog/bookinstance/{seeded.copy_id}/update",
        data={"book": str(seeded.book_id), "imprint": "", "status": "Loaned"},
    )
    assert response.status_code == 200
    page = response.get_data(as_text=True)
    assert "Imprint must be specified." in page
    assert f'<option value="{seeded.book_id}" selected>' in page
    with app.app_context():
        assert db.session.get(BookInstance, seeded.copy_id).imprint == "Gollancz, 2011"


def test_update_missing_is_404(client):
    assert client.get("/catalog/bookinstance/999/update").status_code == 404
