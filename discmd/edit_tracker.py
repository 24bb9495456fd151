"""Tracking of command invocation messages so edits and deletions can update responses."""

from __future__ import annotations

import copy
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from .messages import Message, MessageUpdateEvent, update_message


@dataclass
class _CachedInvocation:
    user_msg: Message
    bot_response: Message | None
    track_deletion: bool


class EditTracker:
    """Stores invocation messages and their bot responses for a limited time.

    Old entries are dropped only when :meth:`purge` is called.
    """

    def __init__(self, max_duration: timedelta | float) -> None:
        if not isinstance(max_duration, timedelta):
            max_duration = timedelta(seconds=max_duration)
        self.max_duration = max_duration
        self._cache: list[_CachedInvocation] = []
        self._lock = threading.RLock()

    @classmethod
    def for_timespan(cls, duration: timedelta | float) -> EditTracker:
        """Create a tracker that keeps messages for ``duration``."""
        return cls(duration)

    def _find(self, message_id: int) -> _CachedInvocation | None:
        return next((inv for inv in self._cache if inv.user_msg.id == message_id), None)

    def process_message_update(
        self, update: MessageUpdateEvent, ignore_edits_if_not_yet_responded: bool
    ) -> tuple[Message, bool] | None:
        """Apply an edit and return ``(message, was_tracked)``, or ``None`` to skip re-running."""
        with self._lock:
            invocation = self._find(update.id)
            if invocation is not None:
                if ignore_edits_if_not_yet_responded and invocation.bot_response is None:
                    return None
                # An unchanged content field means the command should not re-run.
                if update.content is None:
                    return None
                update_message(invocation.user_msg, update)
                return copy.deepcopy(invocation.user_msg), True

            if ignore_edits_if_not_yet_responded:
                return None
            user_msg = Message()
            update_message(user_msg, update)
            return user_msg, False

    def process_message_delete(self, deleted_message_id: int) -> Message | None:
        """Forget a deleted invocation; return its bot response if deletion is tracked."""
        with self._lock:
            invocation = self._find(deleted_message_id)
            if invocation is None:
                return None
            self._cache.remove(invocation)
            return invocation.bot_response if invocation.track_deletion else None

    def purge(self) -> None:
        """Forget every invocation whose last update is older than the tracked duration."""
        max_secs = int(self.max_duration.total_seconds())
        now = int(datetime.now(timezone.utc).timestamp())
        with self._lock:
            self._cache = [
                inv
                for inv in self._cache
                if now - int(inv.user_msg.last_update().timestamp()) < max_secs
            ]

    def find_bot_response(self, user_msg_id: int) -> Message | None:
        """Return the cached bot response for a user message, if any."""
        with self._lock:
            invocation = self._find(user_msg_id)
            return None if invocation is None else invocation.bot_response

    def set_bot_response(
        self, user_msg: Message, bot_response: Message, track_deletion: bool
    ) -> None:
        """Associate ``bot_response`` with ``user_msg``, replacing any earlier response."""
        with self._lock:
            invocation = self._find(user_msg.id)
            if invocation is not None:
                invocation.bot_response = bot_response
            else:
                self._cache.append(
                    _CachedInvocation(copy.deepcopy(user_msg), bot_response, track_deletion)
                )

    def track_command(self, user_msg: Message, track_deletion: bool) -> None:
        """Record that a command for ``user_msg`` is running, without a response yet."""
        with self._lock:
            if self._find(user_msg.id) is None:
                self._cache.append(
                    _CachedInvocation(copy.deepcopy(user_msg), None, track_deletion)
                )