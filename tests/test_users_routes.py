from conftest import bearer, login


class TestUserAdministration:
    def test_list_users_requires_admin(self, client, alice):
        response = client.get("/users", headers=alice["headers"])

        assert response.status_code == 403
        assert response.json()["error"]["message"] == "Access denied. Administrator privileges required."

    def test_list_users_as_admin(self, client, alice, bob, admin):
        response = client.get("/users", headers=admin["headers"])

        assert response.status_code == 200
        body = response.json()
        emails = {u["email"] for u in body["data"]}
        assert body["count"] == 3
        assert {"alice@example.com", "bob@example.com", "admin@example.com"} == emails
        assert all("password_hash" not in u for u in body["data"])

    def test_promote_user(self, client, alice, admin):
        response = client.put(
            f"/users/{alice['user']['id']}/role", json={"role": "admin"}, headers=admin["headers"]
        )

        assert response.status_code == 200
        assert response.json()["message"] == "User role updated successfully."
        assert response.json()["user"]["role"] == "admin"
        # The existing token now carries admin rights, roles are read per request
        assert client.get("/users", headers=alice["headers"]).status_code == 200

    def test_non_admin_cannot_change_roles(self, client, alice, bob):
        response = client.put(f"/users/{bob['user']['id']}/role", json={"role": "admin"}, headers=alice["headers"])

        assert response.status_code == 403

    def test_invalid_role(self, client, alice, admin):
        response = client.put(
            f"/users/{alice['user']['id']}/role", json={"role": "superuser"}, headers=admin["headers"]
        )

        assert response.status_code == 400
        assert "role" in response.json()["error"]["details"]

    def test_unknown_user(self, client, admin):
        response = client.put("/users/9999/role", json={"role": "admin"}, headers=admin["headers"])

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "User not found."

    def test_bad_user_id(self, client, admin):
        response = client.put("/users/abc/role", json={"role": "admin"}, headers=admin["headers"])

        assert response.status_code == 400
        assert response.json()["error"]["details"] == {"id": "User ID must be a valid integer."}


class TestProfile:
    def test_get_profile(self, client, alice):
        response = client.get("/profile", headers=alice["headers"])

        assert response.status_code == 200
        assert response.json()["data"]["email"] == "alice@example.com"

    def test_update_profile(self, client, alice):
        response = client.put(
            "/profile",
            json={"first_name": "Alice", "last_name": "Liddell", "gender": "female", "birth_date": "1990-05-04"},
            headers=alice["headers"],
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert response.json()["message"] == "Profile updated successfully."
        assert data["last_name"] == "Liddell"
        assert data["gender"] == "female"
        assert data["birth_date"] == "1990-05-04"

    def test_password_change_takes_effect(self, client, alice):
        response = client.put("/profile", json={"password": "brand-new-secret"}, headers=alice["headers"])

        assert response.status_code == 200
        assert login(client, "alice@example.com", "brand-new-secret")
        old = client.post("/auth/login", json={"email": "alice@example.com", "password": "password123"})
        assert old.status_code == 401

    def test_role_cannot_be_changed_through_profile(self, client, alice):
        response = client.put("/profile", json={"role": "admin"}, headers=alice["headers"])

        assert response.status_code == 400
        assert "general" in response.json()["error"]["details"]
        assert client.get("/profile", headers=alice["headers"]).json()["data"]["role"] == "user"

    def test_birth_date_must_be_in_past(self, client, alice):
        response = client.put("/profile", json={"birth_date": "2999-01-01"}, headers=alice["headers"])

        assert response.status_code == 400
        assert response.json()["error"]["details"] == {"birth_date": "Birth date must be in the past."}

    def test_my_events(self, client, alice, bob, make_event):
        make_event(alice["headers"], title="Alice's talk", category="lecture")
        make_event(bob["headers"], title="Bob's match", category="sport")

        response = client.get("/profile/events", headers=alice["headers"])

        assert response.status_code == 200
        assert [e["title"] for e in response.json()["data"]] == ["Alice's talk"]

    def test_profile_requires_token(self, client):
        assert client.get("/profile").status_code == 401
        assert client.get("/profile/events", headers=bearer("nope")).status_code == 401


def test_role_change_with_out_of_range_id(client, admin):
    response = client.put("/users/99999999999999999999/role", json={"role": "admin"}, headers=admin["headers"])

    assert response.status_code == 400
    assert response.json()["error"]["details"] == {"id": "User ID must be a valid integer."}


def test_role_is_required(client, alice, admin):
    response = client.put(f"/users/{alice['user']['id']}/role", json={}, headers=admin["headers"])

    assert response.status_code == 400
    assert response.json()["error"]["details"] == {"role": "Role is required."}
