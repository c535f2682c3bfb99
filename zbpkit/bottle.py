"""Drift bottles: messages thrown into named channels and picked at random."""

from __future__ import annotations

import re
import sqlite3
import threading
from dataclasses import dataclass, field
from pathlib import Path

_UINT64_MASK = (1 << 64) - 1
_INT64_MAX = (1 << 63) - 1
_ISO_POLY = 0xD800000000000000

_WS = r"[\t\n\f\r ]"
_WORD = r"[0-9A-Za-z_]"
_THROW_RE = re.compile(rf"(在群[0-9]+)?丢漂流瓶(到频道{_WORD}+)?{_WS}+(.*)")
_PICK_RE = re.compile(rf"(从频道{_WORD}+)?捡漂流瓶")
_JUMP_RE = re.compile(rf"跳入({_WORD}+)?海中")

DEFAULT_CHANNEL = "global"


def _make_table() -> tuple[int, ...]:
    table = []
    for i in range(256):
        crc = i
        for _ in range(8):
            crc = (crc >> 1) ^ _ISO_POLY if crc & 1 else crc >> 1
        table.append(crc)
    return tuple(table)


_TABLE = _make_table()


def crc64_iso(data: bytes) -> int:
    """CRC-64 with the ISO polynomial, as an unsigned 64-bit value."""
    crc = _UINT64_MASK
    for byte in data:
        crc = _TABLE[(crc ^ byte) & 0xFF] ^ (crc >> 8)
    return crc ^ _UINT64_MASK


def bottle_id(qq: int, grp: int, name: str, msg: str) -> int:
    """Signed 64-bit identifier of a bottle."""
    crc = crc64_iso(f"{qq}_{grp}_{name}_{msg}".encode("utf-8"))
    return crc - (1 << 64) if crc > _INT64_MAX else crc


@dataclass(frozen=True)
class Bottle:
    """A message in a bottle; grp 0 can be picked anywhere, negative means a user."""

    qq: int
    grp: int
    name: str
    msg: str
    id: int = field(default=None)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.id is None:
            object.__setattr__(
                self, "id", bottle_id(self.qq, self.grp, self.name, self.msg)
            )


def _quote(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


class Sea:
    """SQLite store of drift bottles, one table per channel."""

    def __init__(self, path: str | Path) -> None:
        self._db = sqlite3.connect(str(path), check_same_thread=False)
        self._lock = threading.Lock()
        self.create_channel(DEFAULT_CHANNEL)

    def __enter__(self) -> Sea:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def create_channel(self, channel: str) -> None:
        channel = channel.rstrip(" ")
        if not channel:
            raise ValueError("频道名为空!")
        with self._lock, self._db:
            self._db.execute(
                f"CREATE TABLE IF NOT EXISTS {_quote(channel)} ("
                "id INTEGER PRIMARY KEY NOT NULL, qq INTEGER NOT NULL, "
                "grp INTEGER NOT NULL, name TEXT NOT NULL, msg TEXT NOT NULL)"
            )

    def throw(self, bottle: Bottle, channel: str) -> None:
        with self._lock, self._db:
            self._db.execute(
                f"REPLACE INTO {_quote(channel)} (id, qq, grp, name, msg) "
                "VALUES (?, ?, ?, ?, ?)",
                (bottle.id, bottle.qq, bottle.grp, bottle.name, bottle.msg),
            )

    def fetch(self, channel: str, grp: int) -> Bottle:
        """Pick a random bottle visible to grp; raise LookupError if none."""
        with self._lock:
            row = self._db.execute(
                f"SELECT id, qq, grp, name, msg FROM {_quote(channel)} "
                "WHERE grp=0 OR grp=? ORDER BY RANDOM() LIMIT 1",
                (grp,),
            ).fetchone()
        if row is None:
            raise LookupError(f"no bottle in channel {channel!r}")
        bid, qq, bgrp, name, msg = row
        return Bottle(qq=qq, grp=bgrp, name=name, msg=msg, id=bid)

    def destroy(self, bottle: Bottle, channel: str) -> None:
        with self._lock, self._db:
            self._db.execute(
                f"DELETE FROM {_quote(channel)} WHERE id=?", (bottle.id,)
            )

    def count(self, channel: str) -> int:
        with self._lock:
            (total,) = self._db.execute(
                f"SELECT COUNT(*) FROM {_quote(channel)}"
            ).fetchone()
        return total

    def close(self) -> None:
        self._db.close()


def parse_throw(text: str) -> tuple[int | None, str, str] | None:
    """Parse a throw command into (group or None, channel, message).

    Returns None when the text is not a throw command.
    """
    match = _THROW_RE.fullmatch(text)
    if match is None:
        return None
    group_part, channel_part, msg = match.groups()
    grp = None
    if group_part:
        grp = int(group_part[2:])
        if grp > _INT64_MAX:
            raise ValueError("群号非法!")
    channel = channel_part[3:] if channel_part else DEFAULT_CHANNEL
    if not msg:
        raise ValueError("消息为空!")
    return grp, channel, msg


def parse_pick(text: str) -> str | None:
    """Channel named by a pick command, or None when the text is not one."""
    match = _PICK_RE.fullmatch(text)
    if match is None:
        return None
    part = match.group(1)
    return part[3:] if part else DEFAULT_CHANNEL


def parse_jump(text: str) -> str | None:
    """Channel named by a jump command, or None when the text is not one."""
    match = _JUMP_RE.fullmatch(text)
    if match is None:
        return None
    return match.group(1) or DEFAULT_CHANNEL