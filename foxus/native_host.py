"""Browser native-messaging host: length-prefixed JSON over stdin and stdout."""

from __future__ import annotations

import json
import sqlite3
import struct
import sys
from typing import Any, BinaryIO

from foxus.activity import Activity
from foxus.categorizer import Categorizer
from foxus.db import Database
from foxus.focus import FocusManager
from foxus.focus_session import current_timestamp

MAX_MESSAGE_SIZE = 1024 * 1024
MAX_URL_LEN = 2048
MAX_TITLE_LEN = 512
BROWSER_ACTIVITY_SECS = 5
DISTRACTION_STEP_SECS = 30

_HEADER = struct.Struct("<I")
_ACTIVITY_FIELDS = (("url", str), ("title", str), ("timestamp", int))
_SIMPLE_TYPES = frozenset({"request_state", "use_distraction_time"})

Message = dict[str, Any]


class MessageError(ValueError):
    """An incoming message is too large or malformed."""


def extract_domain(url: str) -> str:
    """Return the host part of an http(s) URL."""
    while url.startswith("https://"):
        url = url[len("https://"):]
    while url.startswith("http://"):
        url = url[len("http://"):]
    return url.split("/", 1)[0]


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if data is None or len(data) < size:
        raise EOFError("stream closed")
    return data


def _validate(message: Any) -> Message:
    if not isinstance(message, dict):
        raise MessageError("message must be a JSON object")
    kind = message.get("type")
    if kind in _SIMPLE_TYPES:
        return {"type": kind}
    if kind != "activity":
        raise MessageError(f"unknown message type: {kind!r}")
    for name, expected in _ACTIVITY_FIELDS:
        value = message.get(name)
        if not isinstance(value, expected) or isinstance(value, bool):
            raise MessageError(f"activity field {name!r} is missing or invalid")
    return {"type": kind, **{name: message[name] for name, _ in _ACTIVITY_FIELDS}}


def read_message(stream: BinaryIO) -> Message:
    """Read one message; raise EOFError when the stream ends."""
    (length,) = _HEADER.unpack(_read_exact(stream, _HEADER.size))
    if length > MAX_MESSAGE_SIZE:
        raise MessageError(
            f"Message too large: {length} bytes (max: {MAX_MESSAGE_SIZE} bytes)"
        )
    body = _read_exact(stream, length)
    try:
        parsed = json.loads(body)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise MessageError(f"invalid JSON: {exc}") from exc
    return _validate(parsed)


def write_message(stream: BinaryIO, message: Message) -> None:
    """Write one message with its little-endian length prefix."""
    payload = json.dumps(message, separators=(",", ":")).encode("utf-8")
    stream.write(_HEADER.pack(len(payload)))
    stream.write(payload)
    stream.flush()


def _truncate(text: str, limit: int) -> str:
    encoded = text.encode("utf-8")
    if len(encoded) <= limit:
        return text
    return encoded[:limit].decode("utf-8", errors="ignore")


class NativeHost:
    """Answers the browser extension and records its activity."""

    def __init__(
        self, db: Database, focus_manager: FocusManager, categorizer: Categorizer
    ) -> None:
        self._db = db
        self._focus_manager = focus_manager
        self._categorizer = categorizer

    def run(self, stdin: BinaryIO | None = None, stdout: BinaryIO | None = None) -> None:
        """Serve messages until the input stream closes."""
        stdin = stdin if stdin is not None else sys.stdin.buffer
        stdout = stdout if stdout is not None else sys.stdout.buffer
        while True:
            try:
                message = read_message(stdin)
            except EOFError:
                return
            response = self.handle_message(message)
            if response is not None:
                write_message(stdout, response)

    def handle_message(self, message: Message) -> Message | None:
        kind = message["type"]
        if kind == "activity":
            self._record_activity(message["url"], message["title"])
            return None
        if kind == "request_state":
            return self._state()
        if kind == "use_distraction_time":
            return self._use_distraction_time()
        raise MessageError(f"unknown message type: {kind!r}")

    def _record_activity(self, url: str, title: str) -> None:
        url = _truncate(url, MAX_URL_LEN)
        title = _truncate(title, MAX_TITLE_LEN)
        domain = extract_domain(url)
        activity = Activity(
            timestamp=current_timestamp(),
            duration_secs=BROWSER_ACTIVITY_SECS,
            source="browser",
            window_title=title,
            url=url,
            domain=domain,
            category_id=self._categorizer.categorize_url(domain),
        )
        try:
            with self._db.lock:
                activity.save(self._db.connection)
        except sqlite3.Error:
            pass

    def _state(self) -> Message:
        try:
            state = self._focus_manager.get_state()
        except sqlite3.Error:
            return {
                "type": "state",
                "focusActive": False,
                "budgetRemaining": 0,
                "blockedDomains": [],
            }
        return {
            "type": "state",
            "focusActive": state.active,
            "budgetRemaining": state.budget_remaining,
            "blockedDomains": state.blocked_domains,
        }

    def _use_distraction_time(self) -> Message | None:
        try:
            remaining = self._focus_manager.use_distraction_time(DISTRACTION_STEP_SECS)
        except sqlite3.Error:
            return None
        if remaining is None:
            return None
        if remaining <= 0:
            return {"type": "hard_blocked"}
        return {"type": "budget_updated", "remaining": remaining}