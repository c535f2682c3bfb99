"""Bit-packed switches and the short text form of request flags."""

from __future__ import annotations

import re
from dataclasses import dataclass

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_UINT64_MASK = (1 << 64) - 1

_BASE = 0x4E00
_BITS = 14
_CHAR_MASK = (1 << _BITS) - 1
_BLOCK_BYTES = 7
_BLOCK_CHARS = 4

_WS = r"[\t\n\f\r ]"
_REVIEW_RE = re.compile(
    rf"(同意|拒绝)(申请|邀请){_WS}*([\u4e00-\u8e00]{{4}}){_WS}*(.*)"
)
_SWITCH_RE = re.compile(r"(开启|关闭)自动同意(申请|邀请|主人)")


@dataclass
class EventSwitches:
    """Auto-approval switches for friend requests, group invites and the owner."""

    value: int = 0

    def set_apply(self, on: bool) -> None:
        if on:
            self.value |= 0b001
        else:
            self.value &= 0b110

    def set_invite(self, on: bool) -> None:
        if on:
            self.value |= 0b010
        else:
            self.value &= 0b101

    def set_master(self, on: bool) -> None:
        if on:
            self.value |= 0b100
        else:
            self.value &= 0b011

    def apply_on(self) -> bool:
        return self.value & 0b001 > 0

    def invite_on(self) -> bool:
        return self.value & 0b010 > 0

    def master_off(self) -> bool:
        return self.value & 0b100 > 0


@dataclass
class GachaMode:
    """Per-group gacha pool selection; the lowest bit selects the five-star pool."""

    value: int = 0

    def five_star_mode(self) -> bool:
        return self.value & 1 == 1

    def set_mode(self, five_stars: bool) -> bool:
        if five_stars:
            self.value |= 1
        else:
            self.value &= 0xFFFF_FFFF_FFFF_FFFE
        return five_stars


def _encode_block(block: bytes) -> str:
    number = int.from_bytes(block, "big")
    shifts = range(_BITS * (_BLOCK_CHARS - 1), -1, -_BITS)
    return "".join(chr(_BASE + ((number >> shift) & _CHAR_MASK)) for shift in shifts)


def _decode_block(text: str) -> bytes:
    number = 0
    for char in text:
        code = ord(char) - _BASE
        if not 0 <= code <= _CHAR_MASK:
            raise ValueError(f"character {char!r} is outside the encoding range")
        number = (number << _BITS) | code
    return number.to_bytes(_BLOCK_BYTES, "big")


def encode_flag(flag: str | int) -> str:
    """Encode a numeric request flag as four CJK characters."""
    try:
        number = int(flag)
    except ValueError as exc:
        raise ValueError(f"invalid flag: {flag!r}") from exc
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise ValueError(f"flag out of range: {flag!r}")
    raw = (number & _UINT64_MASK).to_bytes(8, "big")
    return _encode_block(raw[1:])


def decode_flag(text: str) -> str:
    """Decode four CJK characters back to the numeric request flag."""
    if len(text) != _BLOCK_CHARS:
        raise ValueError(f"encoded flag must be {_BLOCK_CHARS} characters long")
    unsigned = int.from_bytes(b"\x00" + _decode_block(text), "big")
    if unsigned > _INT64_MAX:
        unsigned -= 1 << 64
    return str(unsigned)


def parse_review_command(text: str) -> tuple[bool, str, str, str] | None:
    """Parse an approve/reject command.

    Returns (approve, kind, flag, reason), where kind is 申请 or 邀请,
    or None when the text is not such a command.
    """
    match = _REVIEW_RE.fullmatch(text)
    if match is None:
        return None
    action, kind, encoded, reason = match.groups()
    return action == "同意", kind, decode_flag(encoded), reason


def parse_switch_command(text: str) -> tuple[bool, str] | None:
    """Parse an auto-approval switch command.

    Returns (turn_on, target), where target is 申请, 邀请 or 主人,
    or None when the text is not such a command.
    """
    match = _SWITCH_RE.fullmatch(text)
    if match is None:
        return None
    option, target = match.groups()
    return option == "开启", target