"""Auth routes — registration, login/logout transitions, generic credential errors.

Invariants:
    - Registration failures come back as 400 with per-field details
    - Login failure is indistinguishable for unknown user vs. wrong password
    - Session state flips only on login/logout
"""


async def _register(client, username="alice", password="pw1234", confirm=None):
    return await client.post(
        "/api/v1/auth/register",
        json={
            "username": username,
            "password": password,
            "confirm": password if confirm is None else confirm,
        },
    )


async def test_register_and_login_scenario(client):
    res = await _register(client)
    assert res.status_code == 201
    assert res.json() == {"redirect": "/login"}

    res = await client.post(
        "/api/v1/auth/login", json={"username": "alice", "password": "pw1234"},
    )
    assert res.status_code == 200
    assert res.json() == {"redirect": "/"}

    res = await client.get("/api/v1/auth/session")
    assert res.json() == {"is_logged_in": True, "username": "alice"}


async def test_register_duplicate_username_is_field_error(client, alice):
    res = await _register(client)
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "USERNAME_TAKEN"
    assert {"field": "username", "message": "Username already taken."} in error["details"]


async def test_register_accumulates_field_errors(client):
    res = await _register(client, username="x" * 21, password="pw", confirm="nope")
    assert res.status_code == 400
    fields = {d["field"] for d in res.json()["error"]["details"]}
    assert fields == {"username", "confirm"}


async def test_login_errors_do_not_reveal_which_part_failed(client, alice):
    unknown = await client.post(
        "/api/v1/auth/login", json={"username": "nouser", "password": "x"},
    )
    wrong = await client.post(
        "/api/v1/auth/login", json={"username": "alice", "password": "wrongpass"},
    )
    assert unknown.status_code == wrong.status_code == 401
    for key in ("code", "message", "category"):
        assert unknown.json()["error"][key] == wrong.json()["error"][key]
    assert unknown.json()["error"]["message"] == "Incorrect username or password."

    res = await client.get("/api/v1/auth/session")
    assert res.json() == {"is_logged_in": False, "username": None}


async def test_logout_returns_to_anonymous(client, alice):
    await client.post(
        "/api/v1/auth/login", json={"username": "alice", "password": "pw1234"},
    )
    res = await client.post("/api/v1/auth/logout")
    assert res.json() == {"redirect": "/"}

    res = await client.get("/api/v1/auth/session")
    assert res.json()["is_logged_in"] is False


async def test_login_flash_shown_once(client, alice):
    await client.post(
        "/api/v1/auth/login", json={"username": "alice", "password": "pw1234"},
    )
    first = await client.get("/api/v1/topics")
    assert first.json()["flashes"] == [
        {"category": "info", "message": "Login successful."},
    ]
    second = await client.get("/api/v1/topics")
    assert second.json()["flashes"] == []


async def test_failed_login_flashes_generic_error_first(client, alice):
    res = await client.post(
        "/api/v1/auth/login", json={"username": "alice", "password": "wrongpass"},
    )
    assert res.status_code == 401

    await client.post(
        "/api/v1/auth/login", json={"username": "alice", "password": "pw1234"},
    )
    flashes = (await client.get("/api/v1/topics")).json()["flashes"]
    assert flashes == [
        {"category": "error", "message": "Incorrect username or password."},
        {"category": "info", "message": "Login successful."},
    ]
