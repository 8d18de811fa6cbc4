"""Service-level checks, no HTTP involved."""

import pytest

from app.core.exceptions import AuthenticationError, NotFoundError, PersistenceError, ValidationError
from app.schemas.message import AddMessageRequest, EditMessageRequest, MessageDraft
from app.schemas.user import SessionUser
from app.services import messages_service
from tests.fixtures.repositories import FailingRepository

ALICE = SessionUser(_id="64b7f0c2a1b2c3d4e5f60718", email="alice@example.com")


@pytest.mark.anyio
async def test_add_message_persists_owner_from_identity(messages_repo):
    payload = AddMessageRequest(message=MessageDraft(name="hi", user="spoofed"))

    created = await messages_service.add_message(payload, identity=ALICE, repo=messages_repo)

    assert created["user"] == ALICE.id
    assert created["name"] == "hi"
    assert await messages_repo.find_by_id(created["_id"]) == created


@pytest.mark.anyio
async def test_add_message_checks_input_before_identity():
    failing = FailingRepository()
    with pytest.raises(ValidationError) as exc:
        await messages_service.add_message(AddMessageRequest(), identity=None, repo=failing)
    assert exc.value.status_code == 400
    assert failing.calls == []


@pytest.mark.anyio
async def test_add_message_requires_identity():
    failing = FailingRepository()
    payload = AddMessageRequest(message=MessageDraft(name="hi"))
    with pytest.raises(AuthenticationError) as exc:
        await messages_service.add_message(payload, identity=None, repo=failing)
    assert exc.value.status_code == 500
    assert exc.value.message == "You are not authenticated"
    assert failing.calls == []


@pytest.mark.anyio
async def test_add_message_wraps_store_errors():
    payload = AddMessageRequest(message=MessageDraft(name="hi"))
    with pytest.raises(PersistenceError) as exc:
        await messages_service.add_message(payload, identity=ALICE, repo=FailingRepository())
    assert exc.value.to_body() == {"error": "Failed to add message"}


@pytest.mark.anyio
async def test_edit_message_requires_id():
    with pytest.raises(ValidationError):
        await messages_service.edit_message("", EditMessageRequest(name="x"), repo=FailingRepository())


@pytest.mark.anyio
async def test_edit_message_unknown_id(messages_repo):
    with pytest.raises(NotFoundError) as exc:
        await messages_service.edit_message(
            "64b7f0c2a1b2c3d4e5f60718", EditMessageRequest(name="x"), repo=messages_repo
        )
    assert exc.value.message == "Message not found"


@pytest.mark.anyio
async def test_edit_message_is_visible_to_later_reads(messages_repo):
    created = await messages_repo.insert_one({"name": "a", "user": ALICE.id})

    updated = await messages_service.edit_message(created["_id"], EditMessageRequest(name="b"), repo=messages_repo)

    assert updated["name"] == "b"
    assert (await messages_repo.find_by_id(created["_id"]))["name"] == "b"


@pytest.mark.anyio
@pytest.mark.parametrize("message", ["hi", [], {"name": 1}, {"user": "x"}])
async def test_add_message_needs_an_object_with_a_text_name(message):
    failing = FailingRepository()
    with pytest.raises(ValidationError):
        await messages_service.add_message(AddMessageRequest(message=message), identity=ALICE, repo=failing)
    assert failing.calls == []


@pytest.mark.anyio
async def test_add_message_from_plain_dict_ignores_owner(messages_repo):
    payload = AddMessageRequest(message={"name": "hi", "user": 42})

    created = await messages_service.add_message(payload, identity=ALICE, repo=messages_repo)

    assert created["user"] == ALICE.id
