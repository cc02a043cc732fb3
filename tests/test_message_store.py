# tests/test_message_store.py
"""Tests for the message store repository."""

from datetime import UTC, datetime, timedelta

import pytest

from marketchat.core.errors import NotFoundError, ValidationError
from marketchat.core.settings import settings
from marketchat.repositories.message_repo import MessageRepository, pair_key

T0 = datetime(2026, 10, 1, 12, 0, tzinfo=UTC)


@pytest.mark.asyncio
async def test_append_stores_pair_key_and_strips_body(db_session) -> None:
    repo = MessageRepository(db_session)
    message = await repo.append(sender_id="user-2", receiver_id="user-1", body="  hello  ")
    await db_session.commit()

    assert message.id is not None
    assert message.body == "hello"
    assert (message.pair_low, message.pair_high) == ("user-1", "user-2")
    assert message.read_at is None
    assert message.hidden_for_sender is False
    assert message.hidden_for_receiver is False


@pytest.mark.asyncio
@pytest.mark.parametrize("body", ["", "   ", "\n\t"])
async def test_append_rejects_blank_body(db_session, body) -> None:
    with pytest.raises(ValidationError):
        await MessageRepository(db_session).append(sender_id="user-1", receiver_id="user-2", body=body)


@pytest.mark.asyncio
async def test_append_rejects_self_message(db_session) -> None:
    with pytest.raises(ValidationError) as excinfo:
        await MessageRepository(db_session).append(sender_id="user-1", receiver_id="user-1", body="hi")
    assert excinfo.value.kind == "validation"


@pytest.mark.asyncio
async def test_append_rejects_oversized_body(db_session) -> None:
    body = "x" * (settings.message_max_length + 1)
    with pytest.raises(ValidationError):
        await MessageRepository(db_session).append(sender_id="user-1", receiver_id="user-2", body=body)


@pytest.mark.asyncio
async def test_get_by_id_unknown_message(db_session) -> None:
    with pytest.raises(NotFoundError) as excinfo:
        await MessageRepository(db_session).get_by_id(999)
    assert excinfo.value.resource == "message"


@pytest.mark.asyncio
async def test_list_between_orders_by_time_then_id(db_session) -> None:
    repo = MessageRepository(db_session)
    late = await repo.append(sender_id="user-1", receiver_id="user-2", body="late", sent_at=T0 + timedelta(minutes=5))
    first_tie = await repo.append(sender_id="user-2", receiver_id="user-1", body="tie a", sent_at=T0)
    second_tie = await repo.append(sender_id="user-1", receiver_id="user-2", body="tie b", sent_at=T0)
    await repo.append(sender_id="user-1", receiver_id="user-3", body="other pair", sent_at=T0)
    await db_session.commit()

    page = await repo.list_between("user-1", "user-2", page=1, page_size=10)

    assert [m.id for m in page.items] == [first_tie.id, second_tie.id, late.id]
    assert page.total == 3
    assert page.has_more is False


@pytest.mark.asyncio
async def test_list_between_pages_are_stable(db_session) -> None:
    repo = MessageRepository(db_session)
    for i in range(5):
        await repo.append(sender_id="user-1", receiver_id="user-2", body=f"m{i}", sent_at=T0)
    await db_session.commit()

    first = await repo.list_between("user-2", "user-1", page=2, page_size=2)
    again = await repo.list_between("user-2", "user-1", page=2, page_size=2)

    assert [m.body for m in first.items] == ["m2", "m3"]
    assert [m.id for m in again.items] == [m.id for m in first.items]
    assert first.has_more is True


@pytest.mark.asyncio
async def test_list_between_clamps_page_size(db_session) -> None:
    repo = MessageRepository(db_session)
    await repo.append(sender_id="user-1", receiver_id="user-2", body="hi")
    await db_session.commit()

    assert (await repo.list_between("user-1", "user-2", page=1, page_size=0)).page_size == 1
    assert (await repo.list_between("user-1", "user-2", page=1, page_size=5000)).page_size == 100
    assert (await repo.list_between("user-1", "user-2")).page_size == settings.default_page_size


@pytest.mark.asyncio
async def test_list_between_rejects_page_below_one(db_session) -> None:
    with pytest.raises(ValidationError):
        await MessageRepository(db_session).list_between("user-1", "user-2", page=0)


@pytest.mark.asyncio
async def test_list_between_skips_rows_hidden_for_viewer(db_session) -> None:
    repo = MessageRepository(db_session)
    kept = await repo.append(sender_id="user-1", receiver_id="user-2", body="kept")
    hidden = await repo.append(sender_id="user-2", receiver_id="user-1", body="hidden")
    hidden.hidden_for_receiver = True
    await db_session.commit()

    viewer_page = await repo.list_between("user-1", "user-2")
    other_page = await repo.list_between("user-2", "user-1")

    assert [m.id for m in viewer_page.items] == [kept.id]
    assert [m.id for m in other_page.items] == [kept.id, hidden.id]


def test_pair_key_is_unordered() -> None:
    assert pair_key("b", "a") == pair_key("a", "b") == ("a", "b")
