import pytest

from authcenter.domain.entities import (
    AppQuery,
    CreateApp,
    CreateUser,
    UserQuery,
    UserUpdate,
)
from authcenter.domain.errors import ContactAlreadyRegistered
from authcenter.infrastructure.memory.store import MemoryStore, MemoryUnitOfWork


def create_user(app_id, **kw) -> CreateUser:
    fields = dict(app_id=app_id, secret_hash="sh", secret_salt="ss", phone="+1555")
    fields.update(kw)
    return CreateUser(**fields)


@pytest.mark.asyncio
async def test_commit_publishes_and_ids_increase(store):
    async with MemoryUnitOfWork(store) as tx:
        a1 = await tx.apps.insert(CreateApp(name="acme", secret_hash="h", secret_salt="s"))
        a2 = await tx.apps.insert(CreateApp(name="beta", secret_hash="h", secret_salt="s"))
        await tx.commit()

    assert (a1, a2) == (1, 2)
    async with MemoryUnitOfWork(store) as tx:
        app = await tx.apps.fetch(AppQuery(id_eq=a2))
    assert app is not None and app.name == "beta"


@pytest.mark.asyncio
async def test_leaving_without_commit_rolls_back(store):
    async with MemoryUnitOfWork(store) as tx:
        await tx.apps.insert(CreateApp(name="acme", secret_hash="h", secret_salt="s"))
        # own writes are visible inside the transaction
        assert await tx.apps.count(AppQuery()) == 1

    assert store.apps == {}


@pytest.mark.asyncio
async def test_exception_rolls_back(store):
    with pytest.raises(RuntimeError):
        async with MemoryUnitOfWork(store) as tx:
            await tx.apps.insert(CreateApp(name="acme", secret_hash="h", secret_salt="s"))
            raise RuntimeError("boom")
    assert store.apps == {}


@pytest.mark.asyncio
async def test_string_identities():
    store = MemoryStore("str")
    async with MemoryUnitOfWork(store) as tx:
        app_id = await tx.apps.insert(CreateApp(name="acme", secret_hash="h", secret_salt="s"))
        await tx.commit()
    assert isinstance(app_id, str) and len(app_id) == 36


@pytest.mark.asyncio
async def test_user_contact_unique_per_app(store):
    async with MemoryUnitOfWork(store) as tx:
        await tx.users.insert(create_user(1, phone="+1555"))
        # same phone under another app is fine
        await tx.users.insert(create_user(2, phone="+1555"))
        with pytest.raises(ContactAlreadyRegistered):
            await tx.users.insert(create_user(1, phone="+1555", email="x@x.com"))
        await tx.commit()
    assert len(store.users) == 2


@pytest.mark.asyncio
async def test_concurrent_registration_loses_at_commit(store):
    first = MemoryUnitOfWork(store)
    second = MemoryUnitOfWork(store)
    async with first as t1, second as t2:
        await t1.users.insert(create_user(1, email="a@x.com", phone=None))
        await t2.users.insert(create_user(1, email="a@x.com", phone=None))
        await t1.commit()
        with pytest.raises(ContactAlreadyRegistered):
            await t2.commit()
    assert len(store.users) == 1


@pytest.mark.asyncio
async def test_update_returns_affected_rows_and_coalesces(store):
    async with MemoryUnitOfWork(store) as tx:
        uid = await tx.users.insert(create_user(1))
        await tx.commit()

    async with MemoryUnitOfWork(store) as tx:
        n = await tx.users.update(
            UserQuery(id_eq=uid, app_id_eq=1), UserUpdate(secret_hash="new")
        )
        missing = await tx.users.update(
            UserQuery(id_eq=uid, app_id_eq=2), UserUpdate(secret_hash="other")
        )
        await tx.commit()

    assert (n, missing) == (1, 0)
    user = store.users[uid]
    assert user.secret_hash == "new"
    assert user.secret_salt == "ss"


@pytest.mark.asyncio
async def test_list_pages_and_count(store):
    async with MemoryUnitOfWork(store) as tx:
        for name in ["acme", "acme pay", "beta", "gamma acme"]:
            await tx.apps.insert(CreateApp(name=name, secret_hash="h", secret_salt="s"))
        await tx.commit()

        query = AppQuery(name_like_any=("acme",))
        page1 = await tx.apps.list(query, 1, 2)
        page2 = await tx.apps.list(query, 2, 2)
        total = await tx.apps.count(query)

    assert [a.name for a in page1] == ["acme", "acme pay"]
    assert [a.name for a in page2] == ["gamma acme"]
    assert total == 3


@pytest.mark.asyncio
async def test_commit_outside_transaction_raises(store):
    with pytest.raises(RuntimeError):
        await MemoryUnitOfWork(store).commit()
