"""Packed 10-byte picture records and random picks from them."""

from __future__ import annotations

import random
from pathlib import Path

ITEM_SIZE = 10

_PREFIX = "http://hs.heisiwu.com/wp-content/uploads/"
_EXTENSIONS = {0: ".jpg", 1: ".png", 2: ".webp"}

COMMANDS = {
    "来点黑丝": "heisi.bin",
    "来点白丝": "baisi.bin",
    "来点jk": "jk.bin",
    "来点巨乳": "jur.bin",
    "来点足控": "zuk.bin",
    "来点网红": "mcn.bin",
}


def item_url(data: bytes) -> str:
    """Expand one 10-byte record into its picture URL."""
    if len(data) != ITEM_SIZE:
        raise ValueError(f"item must be {ITEM_SIZE} bytes, got {len(data)}")
    year = ((data[0] >> 4) & 0x0F) + 2021
    month = data[0] & 0x0F
    if year == 2021:
        num = int.from_bytes(data[1:5], "big")
        digest = data[5:9].hex()
        return (
            f"{_PREFIX}{year:4d}/{month:02d}/"
            f"{year:4d}{month:02d}16{num:06d}-611a3{digest:>8}.jpg"
        )
    d = int.from_bytes(data[1:9], "big")
    scaled = data[9] & 0x80 > 0
    num = data[9] & 0x7F
    url = f"{_PREFIX}{year:4d}/{month:02d}/{d & 0x0FFF_FFFF_FFFF_FFFF:015x}"
    if num > 0:
        url += f"-{num}"
    if scaled:
        url += "-scaled"
    ext = _EXTENSIONS.get(d >> 60)
    if ext is None:
        raise ValueError("invalid ext")
    return url + ext


def load_items(data: bytes) -> list[bytes]:
    """Split a packed file into 10-byte records."""
    if len(data) % ITEM_SIZE != 0:
        raise ValueError("invalid data")
    return [data[i : i + ITEM_SIZE] for i in range(0, len(data), ITEM_SIZE)]


class Gallery:
    """Picture records for each command, loaded from a data folder."""

    def __init__(self, folder: str | Path) -> None:
        base = Path(folder)
        self._items: dict[str, list[bytes]] = {}
        for command, filename in COMMANDS.items():
            try:
                self._items[command] = load_items((base / filename).read_bytes())
            except ValueError as exc:
                raise ValueError(f"invalid data in {filename}") from exc

    def pick(self, command: str) -> str:
        """URL of a random picture for the command."""
        items = self._items[command]
        if not items:
            raise LookupError(f"no pictures for {command!r}")
        return item_url(random.choice(items))