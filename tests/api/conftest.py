import pytest
from fastapi.testclient import TestClient

from authcenter.domain.identity import identity_parser
from authcenter.infrastructure.memory.cacher import MemorySecretCacher
from authcenter.infrastructure.memory.store import MemoryStore, MemoryUnitOfWork
from authcenter.infrastructure.memory.verify_code_store import MemoryVerifyCodeStore
from authcenter.infrastructure.security.hashers import Sha384Hasher
from authcenter.infrastructure.security.secret_generator import TokenSecretGenerator
from authcenter.infrastructure.verify_codes.manager import VerifyCodeManager
from authcenter.main import create_app
from authcenter.presentation.dependencies import (
    get_app_listing_enabled,
    get_cacher,
    get_hasher,
    get_identity_parser,
    get_secret_generator,
    get_uow,
    get_verify_code_manager,
)
from tests.fakes import FakeEmailOK, FakeSmsOK


@pytest.fixture()
def deps():
    store = MemoryStore("int")
    cacher = MemorySecretCacher()
    email, sms = FakeEmailOK(), FakeSmsOK()
    codes = VerifyCodeManager(MemoryVerifyCodeStore(), email=email, sms=sms)
    return {
        "store": store,
        "cacher": cacher,
        "email": email,
        "sms": sms,
        "codes": codes,
        "listing": False,
    }


@pytest.fixture()
def app(deps):
    app = create_app()
    app.dependency_overrides[get_uow] = lambda: MemoryUnitOfWork(deps["store"])
    app.dependency_overrides[get_cacher] = lambda: deps["cacher"]
    app.dependency_overrides[get_hasher] = lambda: Sha384Hasher()
    app.dependency_overrides[get_secret_generator] = lambda: TokenSecretGenerator()
    app.dependency_overrides[get_verify_code_manager] = lambda: deps["codes"]
    app.dependency_overrides[get_identity_parser] = lambda: identity_parser("int")
    app.dependency_overrides[get_app_listing_enabled] = lambda: deps["listing"]
    try:
        yield app
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def client(app):
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture()
def acme(client) -> dict:
    r = client.post("/v1/apps", json={"name": "acme"})
    assert r.status_code == 201, r.text
    return r.json()


@pytest.fixture()
def alice(client, acme) -> dict:
    """A user registered under acme with phone +1555 and password 'pw'."""
    assert client.put("/v1/send_verify_code", json={"phone": "+1555"}).status_code == 200
    r = client.post(
        "/v1/users",
        json={
            "phone": "+1555",
            "password": "pw12",
            "verify_code": "123456",
            "app_id": acme["id"],
            "app_secret": acme["secret"],
        },
    )
    assert r.status_code == 201, r.text
    return r.json()
