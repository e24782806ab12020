"""Tests for messaging."""

from datetime import datetime, timedelta, timezone

import pytest

from app.core.exceptions import BadRequestException, NotFoundException

T0 = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


class TestMessageReads:

    @pytest.mark.asyncio
    async def test_get_by_id(self, db, message_service) -> None:
        a, b = db.add_user(), db.add_user()
        message = db.add_message(a["id"], b["id"], "hello", T0)
        assert (await message_service.get_by_id(message["id"]))["content"] == "hello"
        with pytest.raises(NotFoundException):
            await message_service.get_by_id(999)

    @pytest.mark.asyncio
    async def test_empty_content_is_not_found(self, message_service) -> None:
        with pytest.raises(NotFoundException):
            await message_service.get_by_content("")

    @pytest.mark.asyncio
    async def test_get_by_content(self, db, message_service) -> None:
        a, b = db.add_user(), db.add_user()
        db.add_message(a["id"], b["id"], "hello", T0)
        db.add_message(b["id"], a["id"], "bye", T0)
        found = await message_service.get_by_content("hello")
        assert [m["content"] for m in found] == ["hello"]

    @pytest.mark.asyncio
    async def test_sender_messages_sorted_by_timestamp(self, db, message_service) -> None:
        a, b = db.add_user(), db.add_user()
        db.add_message(a["id"], b["id"], "second", T0 + timedelta(minutes=5))
        db.add_message(b["id"], a["id"], "reply", T0 + timedelta(minutes=1))
        db.add_message(a["id"], b["id"], "first", T0)

        sent = await message_service.get_sorted_by_sender(a["id"])
        assert [m["content"] for m in sent] == ["first", "second"]

        received = await message_service.get_sorted_by_receiver(a["id"])
        assert [m["content"] for m in received] == ["reply"]


class TestSendMessage:

    @pytest.mark.asyncio
    async def test_send_persists(self, db, message_service) -> None:
        a, b = db.add_user(), db.add_user()
        message = await message_service.send(a["id"], b["id"], "hi there")
        assert message["id"] in db.messages
        assert message["sender_id"] == a["id"]
        assert message["receiver_id"] == b["id"]
        assert message["timestamp"].tzinfo is not None

    @pytest.mark.asyncio
    async def test_send_refreshes_cached_reads(self, db, message_service) -> None:
        a, b = db.add_user(), db.add_user()
        assert await message_service.get_sorted_by_sender(a["id"]) == []
        await message_service.send(a["id"], b["id"], "hi")
        assert len(await message_service.get_sorted_by_sender(a["id"])) == 1

    @pytest.mark.asyncio
    async def test_unknown_receiver(self, db, message_service) -> None:
        a = db.add_user()
        with pytest.raises(NotFoundException):
            await message_service.send(a["id"], 999, "hi")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "x" * 101])
    async def test_content_length(self, db, message_service, content) -> None:
        a, b = db.add_user(), db.add_user()
        with pytest.raises(BadRequestException):
            await message_service.send(a["id"], b["id"], content)
