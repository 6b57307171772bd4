def register_body(acme, **kw):
    body = {
        "phone": "+1555",
        "password": "pw12",
        "verify_code": "123456",
        "app_id": acme["id"],
        "app_secret": acme["secret"],
    }
    body.update(kw)
    return body


def test_send_verify_code_delivers_by_sms_and_email(client, deps):
    r = client.put(
        "/v1/send_verify_code", json={"phone": "+1555", "email": "Alice@Example.com"}
    )
    assert r.status_code == 200
    assert r.content == b""
    assert deps["sms"].calls[0]["to"] == "+1555"
    assert deps["email"].calls[0]["to"] == "alice@example.com"


def test_send_verify_code_needs_a_contact(client):
    r = client.put("/v1/send_verify_code", json={})
    assert r.status_code == 400
    assert r.json()["detail"] == "phone or email is required"


def test_send_verify_code_rejects_bad_email(client):
    assert client.put("/v1/send_verify_code", json={"email": "nope"}).status_code == 422


def test_register_user_happy_path(client, acme, alice, deps):
    assert set(alice) == {"id", "secret"}
    user = deps["store"].users[alice["id"]]
    assert user.app_id == acme["id"]
    assert user.phone == "+1555"


def test_register_user_accepts_string_ids(client, acme):
    client.put("/v1/send_verify_code", json={"phone": "+1555"})
    r = client.post("/v1/users", json=register_body(acme, app_id=str(acme["id"])))
    assert r.status_code == 201, r.text


def test_register_user_unparseable_app_id(client, acme):
    r = client.post("/v1/users", json=register_body(acme, app_id="not-a-number"))
    assert r.status_code == 422


def test_register_user_without_code_sent(client, acme):
    r = client.post("/v1/users", json=register_body(acme))
    assert r.status_code == 400
    assert r.json()["detail"] == "invalid verification code"


def test_register_user_wrong_app_secret(client, acme):
    client.put("/v1/send_verify_code", json={"phone": "+1555"})
    r = client.post("/v1/users", json=register_body(acme, app_secret="wrong"))
    assert r.status_code == 401
    assert r.json() == {"detail": "invalid credentials"}


def test_register_user_twice_conflicts(client, acme, alice):
    client.put("/v1/send_verify_code", json={"phone": "+1555"})
    r = client.post("/v1/users", json=register_body(acme))
    assert r.status_code == 409


def test_register_user_missing_contact(client, acme):
    r = client.post("/v1/users", json=register_body(acme, phone=None))
    assert r.status_code == 400
