from datetime import datetime, timedelta, timezone

from discmd.edit_tracker import EditTracker
from discmd.messages import Message, MessageUpdateEvent


def now():
    return datetime.now(timezone.utc)


def user_msg(msg_id=1, content="!ping", timestamp=None):
    return Message(id=msg_id, channel_id=10, content=content, timestamp=timestamp or now())


def bot_msg(msg_id=900, content="pong"):
    return Message(id=msg_id, channel_id=10, content=content)


def test_for_timespan_accepts_seconds_and_timedelta():
    assert EditTracker.for_timespan(60).max_duration == timedelta(seconds=60)
    assert EditTracker.for_timespan(timedelta(minutes=1)).max_duration == timedelta(seconds=60)


def test_set_and_find_bot_response():
    tracker = EditTracker.for_timespan(3600)
    response = bot_msg()
    tracker.set_bot_response(user_msg(), response, track_deletion=False)
    assert tracker.find_bot_response(1) == response
    assert tracker.find_bot_response(2) is None


def test_set_bot_response_overwrites():
    tracker = EditTracker.for_timespan(3600)
    msg = user_msg()
    tracker.set_bot_response(msg, bot_msg(content="first"), False)
    tracker.set_bot_response(msg, bot_msg(content="second"), False)
    assert tracker.find_bot_response(1).content == "second"


def test_track_command_has_no_response():
    tracker = EditTracker.for_timespan(3600)
    tracker.track_command(user_msg(), track_deletion=True)
    assert tracker.find_bot_response(1) is None


def test_update_of_tracked_message():
    tracker = EditTracker.for_timespan(3600)
    tracker.set_bot_response(user_msg(), bot_msg(), False)
    result = tracker.process_message_update(
        MessageUpdateEvent(id=1, channel_id=10, content="!pong"), False
    )
    msg, was_tracked = result
    assert was_tracked is True
    assert msg.content == "!pong"


def test_update_without_content_is_ignored():
    tracker = EditTracker.for_timespan(3600)
    tracker.set_bot_response(user_msg(), bot_msg(), False)
    result = tracker.process_message_update(
        MessageUpdateEvent(id=1, channel_id=10, pinned=True), False
    )
    assert result is None


def test_update_ignored_when_not_yet_responded():
    tracker = EditTracker.for_timespan(3600)
    tracker.track_command(user_msg(), False)
    update = MessageUpdateEvent(id=1, channel_id=10, content="!pong")
    assert tracker.process_message_update(update, True) is None
    msg, was_tracked = tracker.process_message_update(update, False)
    assert was_tracked is True
    assert msg.content == "!pong"


def test_update_of_untracked_message():
    tracker = EditTracker.for_timespan(3600)
    update = MessageUpdateEvent(id=7, channel_id=11, guild_id=3, content="!help")
    msg, was_tracked = tracker.process_message_update(update, False)
    assert was_tracked is False
    assert (msg.id, msg.channel_id, msg.guild_id, msg.content) == (7, 11, 3, "!help")
    assert tracker.process_message_update(update, True) is None


def test_returned_message_is_a_copy():
    tracker = EditTracker.for_timespan(3600)
    tracker.set_bot_response(user_msg(), bot_msg(), False)
    update = MessageUpdateEvent(id=1, channel_id=10, content="!a")
    msg, _ = tracker.process_message_update(update, False)
    msg.content = "changed"
    again, _ = tracker.process_message_update(update, False)
    assert again.content == "!a"


def test_delete_with_track_deletion_returns_response():
    tracker = EditTracker.for_timespan(3600)
    response = bot_msg()
    tracker.set_bot_response(user_msg(), response, track_deletion=True)
    assert tracker.process_message_delete(1) == response
    assert tracker.find_bot_response(1) is None


def test_delete_without_track_deletion_removes_silently():
    tracker = EditTracker.for_timespan(3600)
    tracker.set_bot_response(user_msg(), bot_msg(), track_deletion=False)
    assert tracker.process_message_delete(1) is None
    assert tracker.find_bot_response(1) is None


def test_delete_unknown_message():
    tracker = EditTracker.for_timespan(3600)
    assert tracker.process_message_delete(42) is None