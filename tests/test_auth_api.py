def test_register_returns_tokens_and_profile(client, register_user):
    body = register_user(email="Robin@Example.com", display_name="  Robin ")
    assert body["token_type"] == "bearer"
    assert body["access_token"] and body["refresh_token"]
    assert body["user"]["email"] == "robin@example.com"
    assert body["user"]["display_name"] == "Robin"


def test_register_duplicate_email_conflicts(client, register_user):
    register_user()
    response = client.post(
        "/auth/register", json={"email": "SAM@example.com", "password": "another1pass"}
    )
    assert response.status_code == 409
    assert response.json()["notice"] == "An account with this email already exists."


def test_register_rejects_weak_password(client):
    response = client.post("/auth/register", json={"email": "a@example.com", "password": "lettersonly"})
    assert response.status_code == 422


def test_login_and_me(client, register_user):
    register_user()
    response = client.post("/auth/login", json={"email": "sam@example.com", "password": "calmwaters1"})
    assert response.status_code == 200
    token = response.json()["access_token"]

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["display_name"] == "Sam"


def test_login_wrong_password(client, register_user):
    register_user()
    response = client.post("/auth/login", json={"email": "sam@example.com", "password": "wrongpass1"})
    assert response.status_code == 401
    assert response.json()["notice"] == "Invalid email or password."


def test_account_locks_after_repeated_failures(client, register_user):
    register_user()
    for _ in range(5):
        client.post("/auth/login", json={"email": "sam@example.com", "password": "wrongpass1"})

    response = client.post("/auth/login", json={"email": "sam@example.com", "password": "calmwaters1"})
    assert response.status_code == 423


def test_refresh_issues_new_tokens(client, register_user):
    tokens = register_user()
    response = client.post("/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert response.status_code == 200
    assert response.json()["user"]["email"] == "sam@example.com"


def test_access_token_cannot_refresh(client, register_user):
    tokens = register_user()
    response = client.post("/auth/refresh", json={"refresh_token": tokens["access_token"]})
    assert response.status_code == 401


def test_protected_route_requires_token(client):
    assert client.get("/moods").status_code in (401, 403)
    bad = client.get("/moods", headers={"Authorization": "Bearer not-a-token"})
    assert bad.status_code == 401


def test_profile_update(client, auth_headers):
    response = client.put("/profile", json={"display_name": "  Sammy  "}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["display_name"] == "Sammy"
    assert client.get("/profile", headers=auth_headers).json()["display_name"] == "Sammy"


def test_profile_update_rejects_blank_name(client, auth_headers):
    response = client.put("/profile", json={"display_name": "   "}, headers=auth_headers)
    assert response.status_code == 422


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"
