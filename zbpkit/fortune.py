"""Daily fortune: themes, cache keys and the vertical text layout of the slip."""

from __future__ import annotations

import hashlib

IMAGES = "data/Fortune/"
OMIKUJI_JSON = "data/Fortune/text.json"
FONT = "data/Font/sakura.ttf"
CACHE = IMAGES + "cache/"

THEMES = (
    "车万", "DC4", "爱因斯坦", "星空列车", "樱云之恋", "富婆妹", "李清歌", "公主连结",
    "原神", "明日方舟", "碧蓝航线", "碧蓝幻想", "战双", "阴阳师", "赛马娘", "东方归言录",
    "奇异恩典", "夏日口袋", "ASoul",
)
DEFAULT_THEME = THEMES[0]

_INDEX = {name: i for i, name in enumerate(THEMES)}

_COLUMN = 9
_PADDING = 10
_BASE_X = 115
_BASE_Y = 320.0


def offset(total: int, now: int, distance: float) -> float:
    """Position of item `now` (from 1) among `total` items centred on zero."""
    if total % 2 == 0:
        return (now - total // 2 - 1) * distance
    return (now - total // 2 - 1.5) * distance


def rows(total: int, div: int) -> int:
    """Number of groups of `div` needed to hold `total` items."""
    return -(-total // div)


def text_layout(
    text: str, char_width: float, char_height: float
) -> list[tuple[str, float, float]]:
    """Where each character of the slip goes, in columns read right to left.

    char_width and char_height are the measured size of one glyph.
    Returns (character, x, y) for each character in order.
    """
    tw, th = char_width + _PADDING, char_height + _PADDING
    chars = list(text)
    xsum = rows(len(chars), _COLUMN)
    placed = []
    if xsum == 2:
        div = rows(len(chars), 2)
        for i, char in enumerate(chars):
            xnow = rows(i + 1, div)
            ysum = min(len(chars) - (xnow - 1) * div, div)
            ynow = i % div + 1
            if xnow == 2:
                ynow += _COLUMN - ysum
            x = -offset(xsum, xnow, tw) + _BASE_X
            placed.append((char, x, offset(_COLUMN, ynow, th) + _BASE_Y))
        return placed
    for i, char in enumerate(chars):
        xnow = rows(i + 1, _COLUMN)
        ysum = min(len(chars) - (xnow - 1) * _COLUMN, _COLUMN)
        ynow = i % _COLUMN + 1
        x = -offset(xsum, xnow, tw) + _BASE_X
        placed.append((char, x, offset(ysum, ynow, th) + _BASE_Y))
    return placed


def theme_index(name: str) -> int:
    """Stored index of a background theme."""
    try:
        return _INDEX[name]
    except KeyError:
        raise ValueError("没有这个底图哦～") from None


def theme_for(data: int) -> str:
    """Theme stored in a group's data; the default when it is out of range."""
    value = data & 0xFF
    return THEMES[value] if value < len(THEMES) else DEFAULT_THEME


def cache_key(zipfile: str, index: int, title: str, text: str) -> str:
    """File name of the cached picture for a background and slip."""
    return hashlib.md5(f"{zipfile}{index}{title}{text}".encode("utf-8")).hexdigest()