"""Integration tests for API endpoints"""

import pytest
import tempfile
import os
from fastapi.testclient import TestClient

from taskboard.main import app
from taskboard.storage.migrations import initialize_database
from taskboard.storage.database import reset_database_globals


@pytest.fixture
def temp_db():
    """Create a temporary database for testing"""
    with tempfile.TemporaryDirectory() as temp_dir:
        old_cwd = os.getcwd()
        os.chdir(temp_dir)

        # Create .taskboard directory and config
        os.makedirs(".taskboard", exist_ok=True)
        with open(".taskboard/config.json", "w") as f:
            f.write('{"id_prefix": "test"}')

        # Initialize database
        initialize_database()

        try:
            yield temp_dir
        finally:
            reset_database_globals()
            os.chdir(old_cwd)


@pytest.fixture
def client(temp_db):
    """Create test client"""
    with TestClient(app) as client:
        yield client


def auth(user_id):
    return {"Authorization": f"Bearer {user_id}"}


def register(client, name, **extra):
    response = client.post("/api/users/", json={"name": name, "email": f"{name}@example.com", **extra})
    assert response.status_code == 201
    return response.json()["id"]


@pytest.fixture
def owner(client):
    return register(client, "owner")


@pytest.fixture
def member(client):
    return register(client, "member")


@pytest.fixture
def board(client, owner, member):
    """Board with Todo and Done columns and ``member`` added"""
    response = client.post("/api/boards/", json={"title": "Sprint"}, headers=auth(owner))
    assert response.status_code == 201
    board_id = response.json()["id"]

    response = client.post(f"/api/boards/{board_id}/members", json={"members": [member]}, headers=auth(owner))
    assert response.status_code == 200

    column_ids = []
    for title in ("Todo", "Done"):
        response = client.post("/api/columns/", json={"board_id": board_id, "title": title}, headers=auth(owner))
        assert response.status_code == 201
        column_ids.append(response.json()["id"])

    return {"id": board_id, "todo": column_ids[0], "done": column_ids[1]}


def create_task(client, user_id, column_id, title, **fields):
    response = client.post(
        "/api/tasks/",
        json={"column_id": column_id, "title": title, **fields},
        headers=auth(user_id),
    )
    assert response.status_code == 201
    return response.json()


def board_layout(client, user_id, board_id):
    """{column title: [task titles in order]} from the populated board"""
    response = client.get(f"/api/boards/{board_id}", headers=auth(user_id))
    assert response.status_code == 200
    return {
        column["title"]: [task["title"] for task in column["tasks"]]
        for column in response.json()["columns"]
    }


def test_health_check(client):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"


def test_register_and_me(client):
    user_id = register(client, "ada")
    assert user_id.startswith("test-u-")

    response = client.get("/api/users/me", headers=auth(user_id))
    assert response.status_code == 200
    data = response.json()
    assert data["email"] == "ada@example.com"
    assert data["role"] == "user"


def test_registration_ignores_requested_role(client, owner, board):
    """Test that self-registration cannot grant the admin role"""
    intruder = register(client, "intruder", role="admin")

    response = client.get("/api/users/me", headers=auth(intruder))
    assert response.json()["role"] == "user"

    response = client.delete(f"/api/boards/{board['id']}", headers=auth(intruder))
    assert response.status_code == 403

    response = client.get(f"/api/boards/{board['id']}", headers=auth(owner))
    assert response.status_code == 200


def test_unknown_token_is_rejected(client):
    response = client.get("/api/boards/", headers=auth("nobody"))
    assert response.status_code == 401

    response = client.get("/api/boards/", headers={"Authorization": "Token abc"})
    assert response.status_code == 401


def test_missing_token_is_rejected(client):
    response = client.get("/api/boards/")
    assert response.status_code == 422


def test_board_lifecycle(client, owner, member, board):
    """Test listing, renaming and deleting a board"""
    response = client.get("/api/boards/", headers=auth(member))
    assert [b["id"] for b in response.json()] == [board["id"]]

    response = client.patch(f"/api/boards/{board['id']}", json={"title": "Renamed"}, headers=auth(member))
    assert response.status_code == 403
    assert response.json()["detail"]["code"] == "BOARD_002"

    response = client.patch(f"/api/boards/{board['id']}", json={"title": "Renamed"}, headers=auth(owner))
    assert response.status_code == 200
    assert response.json()["title"] == "Renamed"

    response = client.delete(f"/api/boards/{board['id']}", headers=auth(owner))
    assert response.status_code == 200

    response = client.get(f"/api/boards/{board['id']}", headers=auth(owner))
    assert response.status_code == 404
    assert response.json()["detail"]["code"] == "BOARD_001"


def test_populated_board(client, owner, member, board):
    create_task(client, member, board["todo"], "Write docs", priority="high")
    create_task(client, member, board["todo"], "Review")

    response = client.get(f"/api/boards/{board['id']}", headers=auth(member))
    assert response.status_code == 200
    data = response.json()

    assert data["members"] == [member]
    assert [c["order"] for c in data["columns"]] == [0, 1]
    todo = data["columns"][0]
    assert [t["order"] for t in todo["tasks"]] == [0, 1]
    assert todo["tasks"][0]["priority"] == "high"
    assert todo["tasks"][1]["priority"] == "low"


def test_move_column(client, owner, board):
    response = client.patch(f"/api/columns/{board['done']}/order", json={"new_order": 0}, headers=auth(owner))
    assert response.status_code == 200
    assert response.json()["order"] == 0

    response = client.get("/api/columns/", params={"board_id": board["id"]}, headers=auth(owner))
    assert [c["title"] for c in response.json()] == ["Done", "Todo"]


def test_move_column_out_of_range(client, owner, board):
    response = client.patch(f"/api/columns/{board['done']}/order", json={"new_order": 2}, headers=auth(owner))
    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "ORDER_001"


def test_negative_order_fails_validation(client, owner, board):
    response = client.patch(f"/api/columns/{board['done']}/order", json={"new_order": -1}, headers=auth(owner))
    assert response.status_code == 422


def test_move_task_across_columns(client, owner, member, board):
    """Test dragging a task to the front of another column"""
    first = create_task(client, member, board["todo"], "T1")
    create_task(client, member, board["todo"], "T2")
    create_task(client, member, board["done"], "U1")

    response = client.patch(
        f"/api/tasks/{first['id']}/move",
        json={"target_column_id": board["done"], "new_order": 0},
        headers=auth(member),
    )
    assert response.status_code == 200
    assert response.json()["column_id"] == board["done"]
    assert response.json()["order"] == 0

    assert board_layout(client, member, board["id"]) == {"Todo": ["T2"], "Done": ["T1", "U1"]}


def test_move_task_to_other_board(client, owner, board):
    response = client.post("/api/boards/", json={"title": "Other"}, headers=auth(owner))
    other_board = response.json()["id"]
    response = client.post("/api/columns/", json={"board_id": other_board, "title": "Inbox"}, headers=auth(owner))
    other_column = response.json()["id"]
    task = create_task(client, owner, board["todo"], "Stay")

    response = client.patch(
        f"/api/tasks/{task['id']}/move",
        json={"target_column_id": other_column, "new_order": 0},
        headers=auth(owner),
    )
    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "TASK_002"
    assert board_layout(client, owner, board["id"])["Todo"] == ["Stay"]


def test_update_task_only_sent_fields(client, owner, board):
    task = create_task(client, owner, board["todo"], "Draft", description="keep me")

    response = client.patch(f"/api/tasks/{task['id']}", json={"priority": "medium"}, headers=auth(owner))
    assert response.status_code == 200
    data = response.json()
    assert data["priority"] == "medium"
    assert data["description"] == "keep me"
    assert data["title"] == "Draft"


def test_task_title_too_long(client, owner, board):
    response = client.post(
        "/api/tasks/",
        json={"column_id": board["todo"], "title": "x" * 51},
        headers=auth(owner),
    )
    assert response.status_code == 422


def test_delete_task_and_column(client, owner, member, board):
    """Test that a column can only be deleted once it is empty"""
    task = create_task(client, member, board["todo"], "T1")

    response = client.delete(f"/api/columns/{board['todo']}", headers=auth(owner))
    assert response.status_code == 409
    assert response.json()["detail"]["code"] == "COLUMN_002"

    response = client.delete(f"/api/tasks/{task['id']}", headers=auth(member))
    assert response.status_code == 403

    response = client.delete(f"/api/tasks/{task['id']}", headers=auth(owner))
    assert response.status_code == 200

    response = client.delete(f"/api/columns/{board['todo']}", headers=auth(owner))
    assert response.status_code == 200

    response = client.get("/api/columns/", params={"board_id": board["id"]}, headers=auth(owner))
    assert [(c["title"], c["order"]) for c in response.json()] == [("Done", 0)]


def test_remove_member(client, owner, member, board):
    response = client.delete(f"/api/boards/{board['id']}/members/{member}", headers=auth(owner))
    assert response.status_code == 200

    response = client.get(f"/api/boards/{board['id']}", headers=auth(member))
    assert response.status_code == 403
