"""
Route tests for the todo UI and JSON endpoints.

The app runs against an in-memory store, so these need no database.
"""

import uuid

JSON = {"Accept": "application/json"}


def _create(client, **fields):
    response = client.post("/todos", data=fields, follow_redirects=False)
    assert response.status_code == 303, response.text[:200]
    return response


def _listed(client, **params):
    response = client.get("/todos", params=params)
    assert response.status_code == 200
    return response.text


def test_root_redirects_to_list(client):
    response = client.get("/", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/todos"


def test_empty_list_renders(client):
    html = _listed(client)

    assert "No todos found." in html
    assert "Completion: <strong>0%</strong>" in html


def test_create_then_toggle_moves_todo_between_filters(client, stored):
    response = _create(client, title="Buy milk", priority="high")
    assert response.headers["location"] == "/todos?message=Todo+created+successfully"

    assert "Buy milk" in _listed(client, filter="pending")
    assert "Buy milk" not in _listed(client, filter="completed")

    (todo,) = stored()
    response = client.patch(f"/todos/{todo.id}/toggle", headers=JSON)
    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "completed": True,
        "message": "Todo marked as completed",
    }

    assert "Buy milk" in _listed(client, filter="completed")
    assert "Buy milk" not in _listed(client, filter="pending")
    (todo,) = stored()
    assert todo.completed_at is not None


def test_overdue_filter_with_due_sort(client):
    _create(client, title="Second overdue", due_date="2024-03-01")
    _create(client, title="First overdue", due_date="2024-01-01")
    _create(client, title="Not due yet", due_date="2999-01-01")
    _create(client, title="No due date")

    html = _listed(client, filter="overdue", sort="due")

    assert "Not due yet" not in html
    assert "No due date" not in html
    assert html.index("First overdue") < html.index("Second overdue")
    assert "Overdue: <strong>2</strong>" in html


def test_blank_search_redirects_to_list(client):
    response = client.get("/todos/search", params={"q": ""}, follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/todos"


def test_search_matches_tags_and_categories(client):
    _create(client, title="Call plumber", category="Home")
    _create(client, title="Quarterly report", tags="finance, q3")
    _create(client, title="Walk dog")

    html = client.get("/todos/search", params={"q": "FINANCE"}).text
    assert 'Search Results for &#34;FINANCE&#34;' in html or 'Search Results for "FINANCE"' in html
    assert "Quarterly report" in html
    assert "Walk dog" not in html

    html = client.get("/todos/search", params={"q": "home"}).text
    assert "Call plumber" in html


def test_invalid_create_rerenders_form_with_errors(client, stored):
    response = client.post(
        "/todos",
        data={"title": "", "description": "kept text", "priority": "urgent"},
        follow_redirects=False,
    )

    assert response.status_code == 200
    assert "Title is required" in response.text
    assert "Priority must be low, medium, or high" in response.text
    assert "kept text" in response.text
    assert stored() == []


def test_edit_form_and_update(client, stored):
    _create(client, title="Draft", tags="one, two", due_date="2026-12-24")
    (todo,) = stored()

    form = client.get(f"/todos/{todo.id}/edit")
    assert form.status_code == 200
    assert 'value="Draft"' in form.text
    assert 'value="one, two"' in form.text
    assert 'value="2026-12-24"' in form.text

    response = client.put(
        f"/todos/{todo.id}",
        data={"title": "Final", "priority": "low", "category": "Work", "tags": "three"},
        follow_redirects=False,
    )
    assert response.status_code == 303
    (todo,) = stored()
    assert (todo.title, todo.priority, todo.category, todo.tags, todo.due_date) == (
        "Final",
        "low",
        "Work",
        ["three"],
        None,
    )


def test_invalid_update_keeps_record_and_shows_errors(client, stored):
    _create(client, title="Original")
    (todo,) = stored()

    response = client.put(f"/todos/{todo.id}", data={"title": "x" * 201})

    assert response.status_code == 200
    assert "Title must be between 1 and 200 characters" in response.text
    assert stored()[0].title == "Original"


def test_due_dates_outside_utc_range_rerender_forms(client, stored):
    for due_date in ("0001-01-01T00:00:00+05:00", "9999-12-31T23:00:00-05:00"):
        response = client.post("/todos", data={"title": "x", "due_date": due_date}, follow_redirects=False)
        assert response.status_code == 200
        assert "Due date must be a valid date" in response.text
    assert stored() == []

    _create(client, title="Keep me")
    (todo,) = stored()
    response = client.put(f"/todos/{todo.id}", data={"title": "Keep me", "due_date": "9999-12-31T23:00:00-05:00"})

    assert response.status_code == 200
    assert "Due date must be a valid date" in response.text
    assert stored()[0].due_date is None


def test_method_override_from_html_forms(client, stored):
    _create(client, title="Via form")
    (todo,) = stored()

    response = client.post(f"/todos/{todo.id}/toggle?_method=PATCH", follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/todos"
    assert stored()[0].completed is True

    response = client.post(f"/todos/{todo.id}?_method=DELETE", follow_redirects=False)
    assert response.status_code == 303
    assert stored() == []


def test_delete_with_json_and_missing_ids(client, stored):
    _create(client, title="Short lived")
    (todo,) = stored()

    response = client.delete(f"/todos/{todo.id}", headers=JSON)
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Todo deleted successfully"}

    response = client.delete(f"/todos/{todo.id}", headers=JSON)
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "todo_not_found"


def test_unknown_ids_are_404(client):
    missing = uuid.uuid4()

    assert client.get(f"/todos/{missing}/edit").status_code == 404
    assert client.get("/todos/not-a-uuid/edit").status_code == 404
    assert client.patch(f"/todos/{missing}/toggle", headers=JSON).status_code == 404
    assert client.put(f"/todos/{missing}", data={"title": "x"}).status_code == 404
    assert client.get(f"/todos/{missing}/api").status_code == 404

    page = client.delete(f"/todos/{missing}")
    assert page.status_code == 404
    assert "Todo Not Found" in page.text


def test_unmatched_route_renders_404_page(client):
    response = client.get("/nowhere")

    assert response.status_code == 404
    assert "Page Not Found" in response.text


def test_single_todo_json(client, stored):
    _create(client, title="Inspect me", tags="a")
    (todo,) = stored()

    response = client.get(f"/todos/{todo.id}/api")

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == str(todo.id)
    assert body["title"] == "Inspect me"
    assert body["tags"] == ["a"]
    assert body["isOverdue"] is False
    assert body["dueDate"] is None
    assert body["completedAt"] is None
    assert {"createdAt", "updatedAt"} <= set(body)
    assert "created_at" not in body


def test_unknown_filter_values_are_ignored(client):
    _create(client, title="Visible", priority="low")

    html = _listed(client, filter="bogus", priority="urgent", sort="sideways")

    assert "Visible" in html
