"""Rules of one round of the song guessing game."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from zbpkit.musiclib import MUSIC_TYPES

CLIP_COUNT = 3
MAX_WRONG_ANSWERS = 6


@dataclass(frozen=True)
class MusicInfo:
    """What a song file name says about the song: title, singer and extra info."""

    name: str
    singer: str
    alias: str | None = None

    def answer_text(self) -> str:
        """The answer as it is announced at the end of a round."""
        text = f"歌名:{self.name}\n歌手:{self.singer}"
        if self.alias is not None:
            text += "\n其他信息:\n" + self.alias.replace("&", "\n")
        return text


def parse_music_name(name: str) -> MusicInfo:
    """Parse a file named "title - singer - other.ext"."""
    extension = name.split(".")[-1]
    if extension not in MUSIC_TYPES:
        raise ValueError(f"抽取到了歌曲：\n{name}\n该歌曲不是音乐后缀，请联系bot主人修改")
    parts = name.replace("." + extension, "").split(" - ")
    if len(parts) == 1:
        raise ValueError(f"抽取到了歌曲：\n{name}\n该歌曲命名不符合命名规则，请联系bot主人修改")
    alias = parts[2] if len(parts) > 2 else None
    return MusicInfo(parts[0], parts[1], alias)


class Outcome(enum.Enum):
    """What happens after a player's message."""

    CANCELLED = "cancelled"
    FORBIDDEN = "forbidden"
    HINT = "hint"
    NO_MORE_HINTS = "no_more_hints"
    CORRECT_NAME = "correct_name"
    CORRECT_SINGER = "correct_singer"
    CORRECT_ALIAS = "correct_alias"
    WRONG = "wrong"
    WRONG_NEXT_CLIP = "wrong_next_clip"
    FAILED = "failed"

    @property
    def finished(self) -> bool:
        return self in _FINISHING

    @property
    def plays_clip(self) -> bool:
        return self in (Outcome.HINT, Outcome.WRONG_NEXT_CLIP)


_FINISHING = frozenset(
    {
        Outcome.CANCELLED,
        Outcome.CORRECT_NAME,
        Outcome.CORRECT_SINGER,
        Outcome.CORRECT_ALIAS,
        Outcome.FAILED,
    }
)


def _matches(field: str, answer: str) -> bool:
    return answer in field or field.casefold() == answer.casefold()


class GuessRound:
    """State of a round: which clip is playing and how many wrong answers were given.

    Whenever an outcome plays a clip, the clip to play is `music_count`.
    """

    def __init__(self, info: MusicInfo, owner: int) -> None:
        self.info = info
        self.owner = owner
        self.music_count = 0
        self.answer_count = 0

    def hint(self) -> Outcome:
        """Ask for the next clip."""
        self.music_count += 1
        if self.music_count >= CLIP_COUNT:
            return Outcome.NO_MORE_HINTS
        return Outcome.HINT

    def timeout_clip(self) -> int | None:
        """Clip to play when nobody answered in time, or None when none is left."""
        self.music_count += 1
        if self.music_count >= CLIP_COUNT:
            return None
        return self.music_count

    def answer(self, text: str, user: int) -> Outcome:
        """Judge a player's message; the leading "-" of the message is dropped."""
        answer = text.replace("-", "", 1)
        if answer == "取消":
            return Outcome.CANCELLED if user == self.owner else Outcome.FORBIDDEN
        if answer == "提示":
            return self.hint()
        if _matches(self.info.name, answer):
            return Outcome.CORRECT_NAME
        if _matches(self.info.singer, answer):
            return Outcome.CORRECT_SINGER
        if _matches(self.info.alias or "", answer):
            return Outcome.CORRECT_ALIAS
        self.music_count += 1
        if self.music_count >= CLIP_COUNT:
            if self.answer_count < MAX_WRONG_ANSWERS:
                self.answer_count += 1
                return Outcome.WRONG
            return Outcome.FAILED
        self.answer_count += 1
        return Outcome.WRONG_NEXT_CLIP