"""
Flow tests: messages in, alarms out, with a real scheduler.
"""

import asyncio

import pytest

from bot.handlers import handle_clear_all, handle_list, handle_text

CHAT_ID = 555


@pytest.mark.asyncio
async def test_alarm_fires_and_leaves_list(make_message, registry, mock_gateway, wait_until):
    await handle_text(make_message("0s", chat_id=CHAT_ID), registry, mock_gateway)
    await handle_text(make_message("2h", chat_id=CHAT_ID), registry, mock_gateway)

    assert await wait_until(lambda: mock_gateway.send_alarm.await_count == 1)
    mock_gateway.send_alarm.assert_awaited_once_with(CHAT_ID)
    assert registry.count(CHAT_ID) == 1

    mock_gateway.send.reset_mock()
    await handle_list(make_message("List", chat_id=CHAT_ID), registry, mock_gateway)

    reply = mock_gateway.send.call_args[0][1]
    assert reply.startswith("List\n")
    assert reply.endswith("(2h 0m 0s)")
    assert reply.count("\n") == 1


@pytest.mark.asyncio
async def test_clear_all_silences_pending_alarms(make_message, registry, mock_gateway):
    await handle_text(make_message("1s", chat_id=CHAT_ID), registry, mock_gateway)
    await handle_text(make_message("1m", chat_id=CHAT_ID), registry, mock_gateway)
    await handle_clear_all(make_message("Clear all", chat_id=CHAT_ID), registry, mock_gateway)

    await asyncio.sleep(1.3)

    mock_gateway.send_alarm.assert_not_awaited()
    assert registry.list_timers(CHAT_ID) == []


@pytest.mark.asyncio
async def test_chats_do_not_interfere(make_message, registry, mock_gateway, wait_until):
    await handle_text(make_message("0s", chat_id=1), registry, mock_gateway)
    await handle_text(make_message("1h", chat_id=2), registry, mock_gateway)
    await handle_clear_all(make_message("Clear all", chat_id=2), registry, mock_gateway)

    assert await wait_until(lambda: mock_gateway.send_alarm.await_count == 1)
    mock_gateway.send_alarm.assert_awaited_once_with(1)
