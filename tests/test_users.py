from Models.userModel import User


def _register(client, **overrides):
    payload = {"name": "Jane Buyer", "email": "Jane@Example.com", "password": "secret123", **overrides}
    return client.post("/api/v2/user/create-user", json=payload)


def _token_from(mail):
    return mail["message"].rsplit("/", 1)[-1]


class TestRegistration:
    def test_create_user_sends_activation_link(self, client, outbox):
        resp = _register(client)

        assert resp.status_code == 201
        assert outbox[0]["email"] == "jane@example.com"
        assert "http://client.test/activation/" in outbox[0]["message"]
        assert User.objects.count() == 0

    def test_activation_creates_user_and_logs_in(self, client, outbox):
        _register(client)

        resp = client.post("/api/v2/user/activation", json={"activation_token": _token_from(outbox[0])})

        assert resp.status_code == 201
        body = resp.get_json()
        assert body["user"]["email"] == "jane@example.com"
        assert body["token"]
        assert "token=" in resp.headers["Set-Cookie"]
        assert "HttpOnly" in resp.headers["Set-Cookie"]
        user = User.objects.get(email="jane@example.com")
        assert user.password != "secret123"
        assert user.correct_password("secret123")

    def test_activation_twice_is_rejected(self, client, outbox):
        _register(client)
        token = _token_from(outbox[0])
        client.post("/api/v2/user/activation", json={"activation_token": token})

        resp = client.post("/api/v2/user/activation", json={"activation_token": token})

        assert resp.status_code == 400
        assert resp.get_json()["message"] == "User already exists"

    def test_invalid_activation_token(self, client):
        resp = client.post("/api/v2/user/activation", json={"activation_token": "garbage"})

        assert resp.status_code == 400
        assert resp.get_json() == {"success": False, "message": "Invalid token"}

    def test_duplicate_email(self, client, user, outbox):
        resp = _register(client, email="jane@example.com")

        assert resp.status_code == 400
        assert outbox == []

    def test_missing_fields(self, client, outbox):
        assert _register(client, password="").status_code == 400

    def test_activation_mail_failure(self, client, failing_mail):
        resp = _register(client)

        assert resp.status_code == 500
        assert resp.get_json()["success"] is False


class TestSession:
    def test_login(self, client, user):
        resp = client.post("/api/v2/user/login-user", json={"email": "JANE@example.com", "password": "secret123"})

        assert resp.status_code == 201
        assert resp.get_json()["user"]["_id"] == str(user.id)
        assert "token=" in resp.headers["Set-Cookie"]

    def test_login_wrong_password(self, client, user):
        resp = client.post("/api/v2/user/login-user", json={"email": "jane@example.com", "password": "nope"})

        assert resp.status_code == 400

    def test_login_unknown_email(self, client):
        resp = client.post("/api/v2/user/login-user", json={"email": "ghost@example.com", "password": "x"})

        assert resp.status_code == 400
        assert resp.get_json()["message"] == "User doesn't exists!"

    def test_cookie_authenticates_follow_up_requests(self, client, user):
        client.post("/api/v2/user/login-user", json={"email": "jane@example.com", "password": "secret123"})

        resp = client.get("/api/v2/user/getuser")

        assert resp.status_code == 200
        assert resp.get_json()["user"]["email"] == "jane@example.com"

    def test_getuser_without_token(self, client):
        resp = client.get("/api/v2/user/getuser")

        assert resp.status_code == 401
        assert resp.get_json() == {"success": False, "message": "Please login to continue"}

    def test_seller_token_is_not_a_user_token(self, client, seller_headers):
        assert client.get("/api/v2/user/getuser", headers=seller_headers).status_code == 401

    def test_token_of_deleted_user(self, client, user, user_headers):
        user.delete()

        assert client.get("/api/v2/user/getuser", headers=user_headers).status_code == 404

    def test_logout_clears_cookie(self, client):
        resp = client.get("/api/v2/user/logout")

        assert resp.status_code == 201
        assert "token=;" in resp.headers["Set-Cookie"]


class TestProfile:
    def test_update_info_requires_password(self, client, user_headers):
        resp = client.put("/api/v2/user/update-user-info",
                          json={"name": "Janet", "password": "wrong"}, headers=user_headers)

        assert resp.status_code == 400

    def test_update_info(self, client, user, user_headers):
        resp = client.put("/api/v2/user/update-user-info",
                          json={"name": "Janet", "phoneNumber": "5550000", "password": "secret123"},
                          headers=user_headers)

        assert resp.status_code == 201
        user.reload()
        assert user.name == "Janet"
        assert user.phone_number == 5550000

    def test_add_update_and_delete_address(self, client, user, user_headers):
        resp = client.put("/api/v2/user/update-user-addresses", headers=user_headers, json={
            "country": "US", "city": "Springfield", "address1": "12 Elm St",
            "zipCode": 12345, "addressType": "Home",
        })
        address = resp.get_json()["user"]["addresses"][0]
        assert address["zipCode"] == "12345"

        dup = client.put("/api/v2/user/update-user-addresses", headers=user_headers,
                         json={"city": "Shelbyville", "addressType": "Home"})
        assert dup.status_code == 400

        client.put("/api/v2/user/update-user-addresses", headers=user_headers,
                   json={"_id": address["_id"], "city": "Shelbyville"})
        user.reload()
        assert [a.city for a in user.addresses] == ["Shelbyville"]

        resp = client.delete(f"/api/v2/user/delete-user-address/{address['_id']}", headers=user_headers)
        assert resp.get_json()["user"]["addresses"] == []

    def test_update_password(self, client, user, user_headers):
        resp = client.put("/api/v2/user/update-user-password", headers=user_headers, json={
            "oldPassword": "secret123", "newPassword": "hunter22", "confirmPassword": "hunter22",
        })

        assert resp.status_code == 200
        user.reload()
        assert user.correct_password("hunter22")

    def test_update_password_mismatch(self, client, user_headers):
        resp = client.put("/api/v2/user/update-user-password", headers=user_headers, json={
            "oldPassword": "secret123", "newPassword": "hunter22", "confirmPassword": "hunter23",
        })

        assert resp.status_code == 400
        assert resp.get_json()["message"] == "Password doesn't matched with each other!"

    def test_user_info(self, client, user):
        resp = client.get(f"/api/v2/user/user-info/{user.id}")

        assert resp.status_code == 201
        assert resp.get_json()["user"]["name"] == "Jane Buyer"

    def test_user_info_unknown(self, client):
        assert client.get("/api/v2/user/user-info/64b7f0c2a1b2c3d4e5f60718").status_code == 404


class TestAdmin:
    def test_list_users_excludes_admins(self, client, user, admin_headers):
        resp = client.get("/api/v2/user/admin-all-users", headers=admin_headers)

        assert resp.status_code == 201
        assert [u["email"] for u in resp.get_json()["users"]] == ["jane@example.com"]

    def test_delete_user(self, client, user, admin_headers):
        resp = client.delete(f"/api/v2/user/delete-user/{user.id}", headers=admin_headers)

        assert resp.status_code == 201
        assert User.objects(id=user.id).first() is None

    def test_regular_user_can_not_delete(self, client, user, make_user, auth_headers):
        other = make_user(name="Other", email="other@example.com")

        resp = client.delete(f"/api/v2/user/delete-user/{other.id}", headers=auth_headers(user, "user"))

        assert resp.status_code == 403


def test_password_that_looks_like_a_hash_is_still_hashed(client, user, user_headers):
    resp = client.put("/api/v2/user/update-user-password", headers=user_headers, json={
        "oldPassword": "secret123", "newPassword": "$2b$hunter2", "confirmPassword": "$2b$hunter2",
    })
    assert resp.status_code == 200
    user.reload()
    assert user.password != "$2b$hunter2"

    resp = client.post("/api/v2/user/login-user", json={"email": "jane@example.com", "password": "$2b$hunter2"})

    assert resp.status_code == 201


def test_short_new_password_is_rejected(client, user, user_headers):
    resp = client.put("/api/v2/user/update-user-password", headers=user_headers, json={
        "oldPassword": "secret123", "newPassword": "abc", "confirmPassword": "abc",
    })

    assert resp.status_code == 400
    user.reload()
    assert user.correct_password("secret123")
