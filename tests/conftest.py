import pytest

from authcenter.infrastructure.memory.store import MemoryStore, MemoryUnitOfWork
from authcenter.settings import get_settings
from tests.fakes import (
    FakeErroredCacher,
    FakeHasher,
    FakeSecretGenerator,
    FakeVerifyCodeManager,
    RecordingCacher,
)


@pytest.fixture()
def store():
    return MemoryStore("int")


@pytest.fixture()
def uow(store):
    return MemoryUnitOfWork(store)


@pytest.fixture()
def cacher():
    return RecordingCacher()


@pytest.fixture()
def errored_cacher():
    return FakeErroredCacher()


@pytest.fixture()
def hasher():
    return FakeHasher()


@pytest.fixture()
def secret_generator():
    return FakeSecretGenerator()


@pytest.fixture()
def verify_codes():
    return FakeVerifyCodeManager(valid_code="123456")


@pytest.fixture(autouse=True)
def clean_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def patch_code(monkeypatch):
    """
    Make issued verification codes deterministic in all tests.
    You can override in a specific test by re-monkeypatching.
    """
    from authcenter.domain import services as domain_services

    monkeypatch.setattr(
        domain_services, "generate_numeric_code", lambda length=6: "123456"[:length]
    )
    yield
