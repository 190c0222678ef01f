import models


def test_create_user(client):
    response = client.post(
        "/register",
        json={"email": "new@example.com", "password": "password123", "full_name": "New User"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["email"] == "new@example.com"
    assert "id" in data
    assert "hashed_password" not in data

def test_register_duplicate_email(client, test_user):
    response = client.post(
        "/register",
        json={"email": test_user.email, "password": "password123", "full_name": "Again"},
    )
    assert response.status_code == 400

def test_login_user(client):
    client.post(
        "/register",
        json={"email": "new@example.com", "password": "password123", "full_name": "New User"},
    )
    response = client.post(
        "/token",
        data={"username": "new@example.com", "password": "password123"},
    )
    assert response.status_code == 200
    data = response.json()
    assert "access_token" in data
    assert data["token_type"] == "bearer"

    me = client.get("/users/me", headers={"Authorization": f"Bearer {data['access_token']}"})
    assert me.status_code == 200
    assert me.json()["email"] == "new@example.com"

def test_login_wrong_password(client, test_user):
    response = client.post("/token", data={"username": test_user.email, "password": "wrong"})
    assert response.status_code == 401

def test_invalid_token_rejected(client):
    response = client.get("/users/me", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401

def test_read_user(client, auth_headers, other_user):
    response = client.get(f"/users/{other_user.id}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"id": other_user.id, "full_name": "Other User"}

    assert client.get("/users/9999", headers=auth_headers).status_code == 404

def test_register_device_token_replaces_old(client, auth_headers, db_session, test_user):
    response = client.post("/device-tokens", headers=auth_headers, json={"token": "first"})
    assert response.status_code == 200
    assert response.json()["user_id"] == test_user.id

    response = client.post("/device-tokens", headers=auth_headers, json={"token": "second"})
    assert response.status_code == 200

    tokens = db_session.query(models.DeviceToken).filter(models.DeviceToken.user_id == test_user.id).all()
    assert [t.token for t in tokens] == ["second"]
