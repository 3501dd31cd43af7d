"""
Tests for MessageGateway.

Tests cover:
- Creating messages and referential integrity
- Marking messages read, including re-marking
- Fetching a message with both parties embedded
"""

from datetime import timedelta

import pytest
from sqlalchemy import select, update

from messagely.core import ConstraintViolation, NotFoundError
from messagely.core.database import Message, User
from messagely.core.gateways import utcnow


pytestmark = pytest.mark.asyncio


async def read_at_of(db_manager, message_id):
    async with db_manager.session() as session:
        result = await session.execute(select(Message.read_at).where(Message.id == message_id))
        return result.scalar_one()


class TestCreate:
    """Test message creation."""

    async def test_can_create(self, messages, seeded):
        before = utcnow()

        msg = await messages.create(from_username="test1", to_username="test2", body="new")

        after = utcnow()
        assert isinstance(msg.id, int)
        assert msg.from_username == "test1"
        assert msg.to_username == "test2"
        assert msg.body == "new"
        assert msg.read_at is None
        assert before <= msg.sent_at <= after

    async def test_ids_increase(self, messages, seeded):
        first = await messages.create("test1", "test2", "a")
        second = await messages.create("test2", "test1", "b")

        assert seeded["m1"].id < seeded["m2"].id < first.id < second.id

    async def test_self_message_allowed(self, messages, seeded):
        msg = await messages.create("test1", "test1", "note to self")

        detail = await messages.get(msg.id)
        assert detail.from_user.username == "test1"
        assert detail.to_user.username == "test1"

    async def test_unknown_sender_is_constraint_violation(self, messages, seeded):
        with pytest.raises(ConstraintViolation):
            await messages.create("nope", "test2", "hello")

    async def test_unknown_recipient_is_constraint_violation(self, messages, seeded):
        with pytest.raises(ConstraintViolation):
            await messages.create("test1", "nope", "hello")

    async def test_failed_create_persists_nothing(self, messages, users, seeded):
        with pytest.raises(ConstraintViolation):
            await messages.create("test1", "nope", "hello")

        assert len(await users.messages_from("test1")) == 1


class TestMarkRead:
    """Test the read-state transition."""

    async def test_can_mark_read(self, messages, db_manager, seeded):
        msg = await messages.create("test1", "test2", "new")
        assert msg.read_at is None

        await messages.mark_read(msg.id)

        read_at = await read_at_of(db_manager, msg.id)
        assert read_at is not None
        assert read_at >= msg.sent_at

    async def test_mark_read_twice_moves_forward(self, messages, db_manager, seeded):
        """Re-marking overwrites read_at rather than failing."""
        msg_id = seeded["m1"].id
        await messages.mark_read(msg_id)
        stale = utcnow() - timedelta(days=1)
        async with db_manager.session() as session:
            await session.execute(
                update(Message).where(Message.id == msg_id).values(read_at=stale)
            )

        await messages.mark_read(msg_id)

        second = await read_at_of(db_manager, msg_id)
        assert stale < second <= utcnow()

    async def test_only_target_message_marked(self, messages, db_manager, seeded):
        await messages.mark_read(seeded["m1"].id)

        assert await read_at_of(db_manager, seeded["m2"].id) is None

    async def test_unknown_id_not_found(self, messages, seeded):
        with pytest.raises(NotFoundError) as exc_info:
            await messages.mark_read(9999)

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "No such message: 9999"


class TestGet:
    """Test fetching a single message."""

    async def test_can_get(self, messages, seeded):
        msg = await messages.get(seeded["m1"].id)

        assert msg.model_dump() == {
            "id": seeded["m1"].id,
            "body": "u1-to-u2",
            "read_at": None,
            "sent_at": seeded["m1"].sent_at,
            "from_user": {
                "username": "test1",
                "first_name": "Test1",
                "last_name": "Testy1",
                "phone": "+14155550000",
            },
            "to_user": {
                "username": "test2",
                "first_name": "Test2",
                "last_name": "Testy2",
                "phone": "+14155552222",
            },
        }

    async def test_get_after_mark_read(self, messages, seeded):
        await messages.mark_read(seeded["m2"].id)

        msg = await messages.get(seeded["m2"].id)

        assert msg.read_at is not None
        assert msg.read_at >= msg.sent_at

    async def test_get_reflects_current_profile(self, messages, db_manager, seeded):
        async with db_manager.session() as session:
            await session.execute(
                update(User).where(User.username == "test1").values(phone="+14155553333")
            )

        msg = await messages.get(seeded["m1"].id)

        assert msg.from_user.phone == "+14155553333"

    async def test_unknown_id_not_found(self, messages, seeded):
        with pytest.raises(NotFoundError):
            await messages.get(9999)
