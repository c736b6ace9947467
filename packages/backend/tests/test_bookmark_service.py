"""Bookmark service tests — the ownership gate without HTTP."""

import pytest
import pytest_asyncio

from shelfmark.db.stores import BookmarkStore, UserStore
from shelfmark.errors import AuthError, ForbiddenError, NotFoundError, ValidationError
from shelfmark.services.bookmark_service import BookmarkService

MISSING_ID = "00000000-0000-4000-8000-000000000000"


@pytest.fixture
def svc(db_session):
    return BookmarkService(BookmarkStore(db_session))


@pytest_asyncio.fixture()
async def u1(db_session):
    user = await UserStore(db_session).insert(
        fname="U", lname="One", email="u1@example.com", password_hash="h"
    )
    return str(user.id)


@pytest_asyncio.fixture()
async def u2(db_session):
    user = await UserStore(db_session).insert(
        fname="U", lname="Two", email="u2@example.com", password_hash="h"
    )
    return str(user.id)


@pytest.mark.asyncio
async def test_create_then_get_round_trips_fields(svc, u1):
    created = await svc.create_bookmark(
        u1, {"title": "T", "description": "D", "link": "https://l"}
    )
    fetched = await svc.get_bookmark(u1, str(created.id))
    assert (fetched.title, fetched.description, fetched.link) == ("T", "D", "https://l")
    assert str(fetched.owner_id) == u1


@pytest.mark.asyncio
async def test_create_with_no_fields(svc, u1):
    created = await svc.create_bookmark(u1, {})
    assert created.title is None
    assert created.description is None
    assert created.link is None


@pytest.mark.asyncio
@pytest.mark.parametrize("key", ["owner_id", "id", "url"])
async def test_create_rejects_unknown_fields(svc, u1, key):
    with pytest.raises(ValidationError):
        await svc.create_bookmark(u1, {key: "x"})


@pytest.mark.asyncio
async def test_list_is_scoped_to_caller(svc, u1, u2):
    a = await svc.create_bookmark(u1, {"title": "a"})
    b = await svc.create_bookmark(u2, {"title": "b"})

    assert [x.id for x in await svc.list_bookmarks(u1)] == [a.id]
    assert [x.id for x in await svc.list_bookmarks(u2)] == [b.id]


@pytest.mark.asyncio
async def test_list_empty(svc, u1):
    assert await svc.list_bookmarks(u1) == []


@pytest.mark.asyncio
async def test_other_user_is_forbidden_everywhere(svc, u1, u2):
    b = await svc.create_bookmark(u1, {"title": "private"})
    bid = str(b.id)

    with pytest.raises(ForbiddenError):
        await svc.get_bookmark(u2, bid)
    with pytest.raises(ForbiddenError):
        await svc.update_bookmark(u2, bid, {"title": "mine now"})
    with pytest.raises(ForbiddenError):
        await svc.delete_bookmark(u2, bid)

    still = await svc.get_bookmark(u1, bid)
    assert still.title == "private"


@pytest.mark.asyncio
async def test_missing_bookmark_is_not_found_never_forbidden(svc, u1):
    with pytest.raises(NotFoundError):
        await svc.get_bookmark(u1, MISSING_ID)
    with pytest.raises(NotFoundError):
        await svc.update_bookmark(u1, MISSING_ID, {"title": "x"})
    with pytest.raises(NotFoundError):
        await svc.delete_bookmark(u1, MISSING_ID)


@pytest.mark.asyncio
async def test_malformed_id_is_validation_error(svc, u1):
    with pytest.raises(ValidationError):
        await svc.get_bookmark(u1, "invalid-id")
    with pytest.raises(ValidationError):
        await svc.update_bookmark(u1, "invalid-id", {})
    with pytest.raises(ValidationError):
        await svc.delete_bookmark(u1, "invalid-id")


@pytest.mark.asyncio
async def test_partial_update_leaves_other_fields(svc, u1):
    b = await svc.create_bookmark(u1, {"title": "T", "description": "D", "link": "L"})
    await svc.update_bookmark(u1, str(b.id), {"description": "D2"})

    again = await svc.get_bookmark(u1, str(b.id))
    assert (again.title, again.description, again.link) == ("T", "D2", "L")


@pytest.mark.asyncio
async def test_empty_update_is_noop(svc, u1):
    b = await svc.create_bookmark(u1, {"title": "T"})
    before = b.updated_at

    same = await svc.update_bookmark(u1, str(b.id), {})
    assert same.id == b.id
    assert same.title == "T"
    assert same.updated_at == before


@pytest.mark.asyncio
async def test_update_cannot_reassign_owner(svc, u1, u2):
    b = await svc.create_bookmark(u1, {"title": "T"})
    with pytest.raises(ValidationError):
        await svc.update_bookmark(u1, str(b.id), {"owner_id": u2})


@pytest.mark.asyncio
async def test_delete_is_terminal(svc, u1):
    b = await svc.create_bookmark(u1, {"title": "T"})
    await svc.delete_bookmark(u1, str(b.id))

    with pytest.raises(NotFoundError):
        await svc.get_bookmark(u1, str(b.id))
    with pytest.raises(NotFoundError):
        await svc.delete_bookmark(u1, str(b.id))


@pytest.mark.asyncio
async def test_malformed_caller_id(svc):
    with pytest.raises(AuthError):
        await svc.list_bookmarks("not-a-user-id")
