import pytest

from authcenter.domain.errors import RepositoryError
from authcenter.infrastructure.security.hashers import BcryptHasher
from authcenter.presentation.dependencies import get_hasher, get_uow


def login_body(acme, **kw):
    body = {
        "phone": "+1555",
        "password": "pw12",
        "app_id": acme["id"],
        "app_secret": acme["secret"],
    }
    body.update(kw)
    return body


def verify_body(acme, alice, secret):
    return {
        "id": alice["id"],
        "secret": secret,
        "app_id": acme["id"],
        "app_secret": acme["secret"],
    }


def test_login_rotates_and_verify_follows(client, acme, alice):
    r = client.put("/v1/login", json=login_body(acme))
    assert r.status_code == 200, r.text
    new = r.json()
    assert new["id"] == alice["id"]
    assert new["secret"] != alice["secret"]

    ok = client.put("/v1/verify_secret", json=verify_body(acme, alice, new["secret"]))
    assert ok.status_code == 200
    assert ok.content == b""

    stale = client.put(
        "/v1/verify_secret", json=verify_body(acme, alice, alice["secret"])
    )
    assert stale.status_code == 401
    assert stale.json() == {"detail": "invalid credentials"}


def test_login_failures_are_indistinguishable(client, acme, alice):
    bodies = [
        login_body(acme, password="wrong"),
        login_body(acme, phone="+1999"),
        login_body(acme, app_secret="wrong"),
        login_body(acme, app_id=acme["id"] + 100),
    ]
    responses = [client.put("/v1/login", json=b) for b in bodies]
    assert {r.status_code for r in responses} == {401}
    assert {r.text for r in responses} == {'{"detail":"invalid credentials"}'}


def test_login_needs_a_contact(client, acme):
    r = client.put("/v1/login", json=login_body(acme, phone=None))
    assert r.status_code == 400


def test_verify_secret_unknown_user(client, acme, alice):
    body = verify_body(acme, alice, alice["secret"])
    body["id"] = alice["id"] + 100
    assert client.put("/v1/verify_secret", json=body).status_code == 401


def test_storage_failure_is_a_500_without_detail(app, client, acme):
    class BrokenUoW:
        async def __aenter__(self):
            raise RepositoryError("could not acquire a connection: db down")

        async def __aexit__(self, exc_type, exc, tb):
            return None

    app.dependency_overrides[get_uow] = lambda: BrokenUoW()
    r = client.put("/v1/login", json=login_body(acme))
    assert r.status_code == 500
    assert "db down" not in r.text


@pytest.fixture()
def with_bcrypt(app):
    hasher = BcryptHasher(rounds=4)
    app.dependency_overrides[get_hasher] = lambda: hasher


def test_nul_byte_credentials_are_401_with_bcrypt(with_bcrypt, client, acme, alice):
    login = client.put("/v1/login", json=login_body(acme, password="x\u0000y"))
    assert login.status_code == 401
    assert login.json() == {"detail": "invalid credentials"}

    verify = client.put("/v1/verify_secret", json=verify_body(acme, alice, "x\u0000y"))
    assert verify.status_code == 401

    register = client.post(
        "/v1/users",
        json={
            "email": "bob@example.com",
            "password": "pw12",
            "verify_code": "123456",
            "app_id": acme["id"],
            "app_secret": "x\u0000y",
        },
    )
    assert register.status_code == 401


def test_oversized_secret_is_rejected_before_hashing(client, acme, alice):
    r = client.put("/v1/verify_secret", json=verify_body(acme, alice, "s" * 5000))
    assert r.status_code == 422
