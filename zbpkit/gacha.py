"""Ten-pull gacha over a pool of card pictures read from an archive listing."""

from __future__ import annotations

import random
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

STAR_FILES = {"ThreeStar.png": 3, "FourStar.png": 4, "FiveStar.png": 5}
BACKGROUNDS = {3: "three_bg.jpg", 4: "four_bg.jpg", 5: "five_bg.jpg"}
CANVAS_BACKGROUND = "bg0.jpg"
SHARE_ICON = "Reply.png"

# Where the cards go on the 1920x1080 canvas.
CARD_X0 = 230
CARD_STEP = 146

_ARCHIVE_PREFIX_LEN = len("Genshin/")
_NAME_RE = re.compile(r"_(.*)\.png")

Card = tuple[str, str, str, str]


class _Rng(Protocol):
    def randrange(self, stop: int) -> int: ...


@dataclass
class Pool:
    """Files of the archive: top-level files, folder contents and star icons."""

    files: dict[str, str] = field(default_factory=dict)
    folders: dict[str, list[str]] = field(default_factory=dict)
    stars: dict[int, str] = field(default_factory=dict)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> Pool:
        """Build the pool from archive entry names; the top folder is dropped."""
        pool = cls()
        for raw in names:
            if raw.endswith("/"):
                continue
            name = raw[_ARCHIVE_PREFIX_LEN:]
            slash = name.rfind("/")
            if slash < 0:
                pool.files[name] = name
                continue
            folder = name[:slash]
            if not folder:
                continue
            pool.folders.setdefault(folder, []).append(name)
            if folder == "gacha":
                stars = STAR_FILES.get(name[slash + 1 :])
                if stars is not None:
                    pool.stars[stars] = name
        return pool

    def file(self, name: str) -> str:
        """A top-level file of the pool; LookupError when it is missing."""
        try:
            return self.files[name]
        except KeyError:
            raise LookupError(f"missing file {name!r}") from None

    def star(self, stars: int) -> str:
        try:
            return self.stars[stars]
        except KeyError:
            raise LookupError(f"missing {stars}-star icon") from None

    def icon_for(self, name: str) -> str:
        """Element icon of a card, named by the part of its file name before "_"."""
        start = name.rfind("/") + 1
        end = name.find("_")
        if end < start:
            raise ValueError(f"card name {name!r} has no element part")
        return self.file(name[start:end] + ".png")


@dataclass
class Roll:
    """Result of a pull.

    Each card is (background, card picture, star icon, element icon), in
    the order they are laid out from left to right.
    """

    cards: list[Card]
    text: str
    reply_mode: bool
    total: int

    def positions(self) -> list[int]:
        """Horizontal position of each card on the canvas."""
        return [CARD_X0 + CARD_STEP * i for i in range(len(self.cards))]


def display_name(path: str) -> str:
    """Character or weapon name taken from a card file name."""
    match = _NAME_RE.search(path)
    if match is None:
        raise ValueError(f"no name in {path!r}")
    return match.group(1)


def reply_text(names: Iterable[str], num: int, prefix: str) -> str:
    """Announcement of five-star pulls; num 1 is characters, 2 is weapons."""
    if num == 1:
        header = "★五星角色★\n"
    elif num == 2 and prefix:
        header = "\n★五星武器★\n"
    else:
        header = "★五星武器★\n"
    return header + "".join(display_name(name) + " * " for name in names)


def roll(
    pool: Pool,
    nums: int,
    five_star_mode: bool,
    total: int = 0,
    rng: _Rng | None = None,
) -> Roll:
    """Pull `nums` cards; `total` counts pulls made so far and is returned updated."""
    source = rng if rng is not None else random

    def pick(folder: str) -> str:
        items = pool.folders.get(folder) or []
        if not items:
            raise LookupError(f"no entries in {folder!r}")
        return items[source.randrange(len(items))]

    fives: list[str] = []
    fours: list[str] = []
    five_arms: list[str] = []
    four_arms: list[str] = []
    three_arms: list[str] = []

    def add_five() -> None:
        if source.randrange(2) == 0:
            fives.append(pick("five"))
        else:
            five_arms.append(pick("five2"))

    def add_four() -> None:
        if source.randrange(2) == 0:
            fours.append(pick("four"))
        else:
            four_arms.append(pick("four2"))

    if total % 9 == 0:
        add_five()
        nums -= 1

    if five_star_mode:
        for _ in range(nums):
            add_five()
    else:
        for _ in range(nums):
            chance = source.randrange(1000)
            if chance <= 800:
                three_arms.append(pick("Three"))
            elif chance <= 885:
                fours.append(pick("four"))
            elif chance <= 970:
                four_arms.append(pick("four2"))
            elif chance <= 985:
                fives.append(pick("five"))
            else:
                five_arms.append(pick("five2"))
        if not fours and not four_arms and three_arms:
            three_arms.pop()
            add_four()
        total += 1

    cards: list[Card] = []
    text = ""
    reply_mode = False

    def place(items: list[str], stars: int) -> None:
        if not items:
            return
        background = pool.file(BACKGROUNDS[stars])
        star = pool.star(stars)
        cards.extend((background, item, star, pool.icon_for(item)) for item in items)

    if fives:
        place(fives, 5)
        text += reply_text(fives, 1, text)
        reply_mode = True
    place(fours, 4)
    if five_arms:
        place(five_arms, 5)
        text += reply_text(five_arms, 2, text)
        reply_mode = True
    place(four_arms, 4)
    place(three_arms, 3)

    return Roll(cards=cards, text=text, reply_mode=reply_mode, total=total)