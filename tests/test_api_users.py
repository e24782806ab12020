"""HTTP tests for /profile."""

from app.db.models.user_model import UserRole, UserStatus

ALICE = {
    "name": "Alice",
    "surname": "Novak",
    "date_of_birth": "1995-04-12",
    "country_of_origin": "Czechia",
    "email": "alice@mail.com",
    "password": "Secret123",
    "phone_number": "+420777123456",
}


class TestRegistration:

    def test_register_then_fetch(self, client, db, headers_for) -> None:
        response = client.post("/profile/register", json=ALICE)
        assert response.status_code == 201
        created = response.json()
        assert "password" not in created and "hashed_password" not in created

        response = client.get(f"/profile/{created['id']}", headers=headers_for(created))
        assert response.status_code == 200
        fetched = response.json()
        for field in ("name", "surname", "date_of_birth", "country_of_origin", "email", "phone_number"):
            assert fetched[field] == ALICE[field]
        assert fetched["user_role"] == UserRole.ROLE_USER.value

    def test_invalid_fields_are_422(self, client) -> None:
        for field, value in [
            ("email", "alice@mail"),
            ("password", "short1A"),
            ("password", "nouppercase1"),
            ("password", "NoDigitsOrSymbols"),
            ("phone_number", "12-34"),
            ("name", "A"),
        ]:
            response = client.post("/profile/register", json={**ALICE, field: value})
            assert response.status_code == 422, field

    def test_duplicate_email(self, client, db) -> None:
        db.add_user(email="alice@mail.com")
        assert client.post("/profile/register", json=ALICE).status_code == 400


class TestAccessControl:

    def test_requires_token(self, client, db) -> None:
        user = db.add_user()
        assert client.get(f"/profile/{user['id']}").status_code == 401

    def test_bad_token(self, client, db) -> None:
        db.add_user()
        response = client.get("/profile/1", headers={"Authorization": "Bearer nonsense"})
        assert response.status_code == 401

    def test_list_is_staff_only(self, client, db, headers_for) -> None:
        user = db.add_user()
        moderator = db.add_user(user_role=UserRole.ROLE_MODERATOR.value)
        assert client.get("/profile/", headers=headers_for(user)).status_code == 403
        response = client.get("/profile/", headers=headers_for(moderator))
        assert response.status_code == 200
        assert len(response.json()) == 2

    def test_delete_is_admin_only(self, client, db, headers_for) -> None:
        target = db.add_user()
        moderator = db.add_user(user_role=UserRole.ROLE_MODERATOR.value)
        admin = db.add_user(user_role=UserRole.ROLE_ADMIN.value)
        assert client.delete(f"/profile/{target['id']}", headers=headers_for(moderator)).status_code == 403
        assert client.delete(f"/profile/{target['id']}", headers=headers_for(admin)).status_code == 204
        assert target["id"] not in db.users

    def test_role_change_is_admin_only(self, client, db, headers_for) -> None:
        target = db.add_user()
        admin = db.add_user(user_role=UserRole.ROLE_ADMIN.value)
        body = {"user_role": "moderator"}
        assert client.patch(f"/profile/{target['id']}/role", json=body,
                            headers=headers_for(target)).status_code == 403
        response = client.patch(f"/profile/{target['id']}/role", json=body, headers=headers_for(admin))
        assert response.status_code == 202
        assert response.json()["user_role"] == UserRole.ROLE_MODERATOR.value

    def test_unknown_role_is_400(self, client, db, headers_for) -> None:
        admin = db.add_user(user_role=UserRole.ROLE_ADMIN.value)
        response = client.patch(f"/profile/{admin['id']}/role", json={"user_role": "king"},
                                headers=headers_for(admin))
        assert response.status_code == 400


class TestFilter:

    def test_sorted_page(self, client, db, headers_for) -> None:
        admin = db.add_user(name="Zed", user_role=UserRole.ROLE_ADMIN.value)
        db.add_user(name="Anna")
        response = client.get("/profile/filter", params={"page": 0, "size": 1, "sort": "asc"},
                              headers=headers_for(admin))
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 2
        assert [u["name"] for u in body["items"]] == ["Anna"]

    def test_invalid_sort(self, client, db, headers_for) -> None:
        admin = db.add_user(user_role=UserRole.ROLE_ADMIN.value)
        response = client.get("/profile/filter", params={"sort": "up"}, headers=headers_for(admin))
        assert response.status_code == 400


class TestFieldUpdates:

    def test_email_password_phone(self, client, db, headers_for) -> None:
        user = db.add_user()
        headers = headers_for(user)
        assert client.patch(f"/profile/{user['id']}/email", json={"email": "x@mail.com"},
                            headers=headers).status_code == 202
        assert client.patch(f"/profile/{user['id']}/password", json={"password": "Newpass1!"},
                            headers=headers).status_code == 202
        assert client.patch(f"/profile/{user['id']}/phone-number", json={"phone_number": "987654321"},
                            headers=headers).status_code == 202
        assert db.users[user["id"]]["email"] == "x@mail.com"
        assert db.users[user["id"]]["phone_number"] == "987654321"

    def test_invalid_email_update_is_422(self, client, db, headers_for) -> None:
        user = db.add_user()
        response = client.patch(f"/profile/{user['id']}/email", json={"email": "nope"},
                                headers=headers_for(user))
        assert response.status_code == 422

    def test_status_toggle(self, client, db, headers_for) -> None:
        user = db.add_user()
        moderator = db.add_user(user_role=UserRole.ROLE_MODERATOR.value)
        response = client.patch(f"/profile/{user['id']}/status", headers=headers_for(moderator))
        assert response.status_code == 202
        assert response.json()["status"] == UserStatus.STATUS_BLOCKED.value

    def test_visibility_toggle(self, client, db, headers_for) -> None:
        user = db.add_user()
        response = client.patch(f"/profile/{user['id']}/visibility", headers=headers_for(user))
        assert response.status_code == 202
        assert response.json()["visibility"] == "STATUS_OFFLINE"

    def test_avatar_upload(self, client, db, headers_for, media_root) -> None:
        user = db.add_user()
        response = client.patch(
            f"/profile/{user['id']}/avatar",
            files={"avatar": ("me.png", b"\x89PNGdata", "image/png")},
            headers=headers_for(user),
        )
        assert response.status_code == 202
        assert response.json()["avatar"].startswith("/media/avatars/")
        assert len(list((media_root / "avatars").iterdir())) == 1

    def test_uploaded_avatar_is_served(self, client, db, headers_for, media_root) -> None:
        user = db.add_user()
        response = client.patch(
            f"/profile/{user['id']}/avatar",
            files={"avatar": ("me.png", b"\x89PNGdata", "image/png")},
            headers=headers_for(user),
        )
        avatar_url = response.json()["avatar"]

        served = client.get(avatar_url)
        assert served.status_code == 200
        assert served.content == b"\x89PNGdata"
        assert served.headers["content-type"] == "image/png"

    def test_missing_user_is_404(self, client, db, headers_for) -> None:
        user = db.add_user()
        response = client.patch("/profile/999/phone-number", json={"phone_number": "987654321"},
                                headers=headers_for(user))
        assert response.status_code == 404
