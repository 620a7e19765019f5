import pytest
from fastapi.testclient import TestClient

from wordle.core.config import Settings
from wordle.main import create_app


@pytest.fixture()
def app():
    return create_app(Settings(database_url="sqlite+pysqlite:///:memory:", log_level="WARNING"))


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c


def _register(client, email="alice@example.com", username="alice", password="pw-alice"):
    return client.post("/api/register", json={"username": username, "email": email, "password": password})


def test_register_starts_session(client):
    res = _register(client)

    assert res.status_code == 200
    assert res.json() == {"success": True, "redirect": "/game"}
    assert "wordle_session" in res.cookies

    me = client.get("/api/session").json()
    assert me["username"] == "alice"
    assert isinstance(me["userId"], int)


@pytest.mark.parametrize(
    "body",
    [
        {"email": "a@example.com", "password": "pw"},
        {"username": "a", "password": "pw"},
        {"username": "a", "email": "a@example.com"},
        {"username": "  ", "email": "a@example.com", "password": "pw"},
        {},
    ],
)
def test_register_requires_all_fields(client, body):
    res = client.post("/api/register", json=body)

    assert res.status_code == 400
    assert res.json() == {"error": "All fields required"}


def test_register_rejects_overlong_username(client):
    res = _register(client, username="x" * 51)

    assert res.status_code == 400
    assert "username" in res.json()["error"]


def test_register_duplicate_email(client):
    assert _register(client).status_code == 200
    client.post("/api/logout")

    res = _register(client, username="other", password="another")

    assert res.status_code == 400
    assert res.json() == {"error": "Email already registered"}


def test_email_is_case_insensitive(client):
    assert _register(client, email="Alice@Example.com").status_code == 200
    client.post("/api/logout")

    assert _register(client, email="alice@example.com").status_code == 400
    assert client.post("/api/login", json={"email": "ALICE@example.com", "password": "pw-alice"}).status_code == 200


def test_login_success_and_failures(client):
    _register(client)
    client.post("/api/logout")
    client.cookies.clear()

    ok = client.post("/api/login", json={"email": "alice@example.com", "password": "pw-alice"})
    assert ok.status_code == 200
    assert ok.json() == {"success": True, "redirect": "/game"}
    assert client.get("/api/session").json()["username"] == "alice"

    client.post("/api/logout")
    wrong = client.post("/api/login", json={"email": "alice@example.com", "password": "nope"})
    unknown = client.post("/api/login", json={"email": "ghost@example.com", "password": "nope"})

    assert wrong.status_code == unknown.status_code == 400
    assert wrong.json() == unknown.json() == {"error": "Invalid email or password"}
    assert client.get("/api/session").json() == {"userId": None}


def test_login_requires_fields(client):
    res = client.post("/api/login", json={"email": "alice@example.com"})

    assert res.status_code == 400
    assert res.json() == {"error": "Email and password required"}


def test_logout_clears_session(client):
    _register(client)
    assert client.get("/api/session").json()["userId"] is not None

    res = client.post("/api/logout")

    assert res.status_code == 200
    assert res.json() == {"success": True}
    assert client.get("/api/session").json() == {"userId": None}


def test_logout_without_session(client):
    res = client.post("/api/logout")

    assert res.status_code == 200
    assert res.json() == {"success": True}


def test_old_cookie_is_dead_after_logout(client, app):
    _register(client)
    token = client.cookies.get("wordle_session")
    client.post("/api/logout")

    client.cookies.set("wordle_session", token)
    assert client.get("/api/session").json() == {"userId": None}
    assert len(app.state.session_store) == 0


def test_garbage_cookie_is_ignored(client):
    client.cookies.set("wordle_session", "garbage")

    assert client.get("/api/session").json() == {"userId": None}


def test_pages_redirect_when_anonymous(client):
    for path in ("/game", "/dashboard"):
        res = client.get(path, follow_redirects=False)
        assert res.status_code == 302
        assert res.headers["location"] == "/"

    home = client.get("/", follow_redirects=False)
    assert home.status_code == 200
    assert "text/html" in home.headers["content-type"]


def test_pages_when_logged_in(client):
    _register(client)

    home = client.get("/", follow_redirects=False)
    assert home.status_code == 302
    assert home.headers["location"] == "/game"

    for path in ("/game", "/dashboard"):
        res = client.get(path, follow_redirects=False)
        assert res.status_code == 200
        assert "<html" in res.text


def test_static_assets_and_health(client):
    assert client.get("/static/app.js").status_code == 200
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/api/health").json() == {"status": "ok"}


def test_repeated_logins_do_not_pile_up_sessions(client, app):
    _register(client)
    first = client.cookies.get("wordle_session")

    for _ in range(5):
        assert client.post("/api/login", json={"email": "alice@example.com", "password": "pw-alice"}).status_code == 200

    assert len(app.state.session_store) == 1
    assert client.get("/api/session").json()["username"] == "alice"

    client.cookies.clear()
    client.cookies.set("wordle_session", first)
    assert client.get("/api/session").json() == {"userId": None}


def test_register_over_existing_session_replaces_it(client, app):
    _register(client)
    _register(client, email="bob@example.com", username="bob")

    assert len(app.state.session_store) == 1
    assert client.get("/api/session").json()["username"] == "bob"
