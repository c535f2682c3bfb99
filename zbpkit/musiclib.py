"""Local music library for the song guessing game: config, playlists, clips."""

from __future__ import annotations

import json
import os
import random
import subprocess
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

# Points in the song where the three ten-second clips start (h:m:s).
CUT_TIMES = ("00:00:05", "00:00:30", "00:01:00")
CLIP_SECONDS = "10"
MUSIC_TYPES = "mp3;MP3;wav;WAV;amr;AMR;3gp;3GP;3gpp;3GPP;acc;ACC"

DEFAULT_PLAYLIST_NAME = "FM"
DEFAULT_PLAYLIST_ID = 3136952023


class _Entry(Protocol):
    name: str

    def is_dir(self) -> bool: ...


def _default_music_path() -> str:
    return os.getcwd().replace("\\", "/") + "/data/guessmusic/music/"


@dataclass
class ListRaw:
    """A playlist name bound to an online playlist id."""

    name: str
    id: int = 0


@dataclass
class DefaultList:
    """The playlist a group plays by default."""

    group_id: int
    name: str


@dataclass
class ListInfo:
    """A local playlist: its name, number of entries and bound online id."""

    name: str
    number: int
    id: int = 0


@dataclass
class Config:
    """User settings of the music library."""

    music_path: str = field(default_factory=_default_music_path)
    local: bool = True
    api: bool = True
    cookie: str = ""
    playlist: list[ListRaw] = field(
        default_factory=lambda: [ListRaw(DEFAULT_PLAYLIST_NAME, DEFAULT_PLAYLIST_ID)]
    )
    defaultlist: list[DefaultList] = field(default_factory=list)

    @classmethod
    def load(cls, path: str | Path) -> Config:
        """Read the config file; write and return the defaults when it is missing."""
        target = Path(path)
        if not target.exists():
            config = cls()
            config.save(target)
            return config
        with target.open(encoding="utf-8") as reader:
            return cls._from_dict(json.load(reader))

    def save(self, path: str | Path) -> None:
        with Path(path).open("w", encoding="utf-8") as writer:
            json.dump(self._to_dict(), writer, ensure_ascii=False)
            writer.write("\n")

    def _to_dict(self) -> dict[str, Any]:
        return {
            "musicPath": self.music_path,
            "local": self.local,
            "api": self.api,
            "cookie": self.cookie,
            "playlist": [{"name": p.name, "id": p.id} for p in self.playlist] or None,
            "defaultlist": [
                {"gid": d.group_id, "name": d.name} for d in self.defaultlist
            ]
            or None,
        }

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> Config:
        return cls(
            music_path=str(data.get("musicPath") or ""),
            local=bool(data.get("local", False)),
            api=bool(data.get("api", False)),
            cookie=str(data.get("cookie") or ""),
            playlist=[
                ListRaw(str(p.get("name") or ""), int(p.get("id") or 0))
                for p in data.get("playlist") or []
            ],
            defaultlist=[
                DefaultList(int(d.get("gid") or 0), str(d.get("name") or ""))
                for d in data.get("defaultlist") or []
            ],
        )


def _sorted_entries(directory: Path) -> list[os.DirEntry]:
    with os.scandir(directory) as it:
        return sorted(it, key=lambda entry: entry.name)


def get_lists(config: Config, music_path: str | Path) -> list[ListInfo]:
    """The playlists (sub-folders) of the library, sorted by name."""
    bound = {p.name: p.id for p in config.playlist if p.id != 0}
    root = Path(music_path)
    root.mkdir(parents=True, exist_ok=True)
    entries = _sorted_entries(root)
    if not entries:
        raise LookupError("所设置的歌库不存在任何歌单！")
    lists = []
    for entry in entries:
        if not entry.is_dir():
            continue
        try:
            number = len(_sorted_entries(root / entry.name))
        except OSError:
            continue
        lists.append(ListInfo(entry.name, number, bound.get(entry.name, 0)))
    return lists


def pick_local_music(entries: Sequence[_Entry]) -> str:
    """Name of a random file among the entries; "" when there is none."""
    files = [entry for entry in entries if not entry.is_dir()]
    if not files:
        return ""
    return random.choice(files).name


def music_lottery(
    config: Config, music_path: str | Path, list_name: str
) -> tuple[Path, str]:
    """Draw a random song from a playlist: (playlist folder, file name)."""
    try:
        lists = get_lists(config, music_path)
    except (LookupError, OSError) as exc:
        raise LookupError(f"获取列表错误,{exc}") from exc
    if list_name not in {info.name for info in lists}:
        raise LookupError("指定的歌单不存在与列表当中")
    folder = Path(music_path) / list_name
    folder.mkdir(parents=True, exist_ok=True)
    entries = _sorted_entries(folder)
    if not entries:
        raise LookupError("本地歌单数据为0")
    return folder, pick_local_music(entries)


def ffmpeg_arguments(music_file: str | Path, output_dir: str | Path) -> list[str]:
    """Arguments to ffmpeg that cut three clips 0.wav, 1.wav and 2.wav."""
    out = Path(output_dir)
    arguments = ["-y", "-i", str(music_file)]
    for index, start in enumerate(CUT_TIMES):
        arguments += ["-ss", start, "-t", CLIP_SECONDS, str(out / f"{index}.wav")]
    arguments.append("-hide_banner")
    return arguments


def cut_music(
    music_name: str, music_dir: str | Path, output_dir: str | Path
) -> list[Path]:
    """Cut three ten-second clips of a song with ffmpeg; returns their paths."""
    out = Path(output_dir)
    try:
        out.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OSError(f"[生成歌曲目录错误]ERROR: {exc}") from exc
    command = ["ffmpeg", *ffmpeg_arguments(Path(music_dir) / music_name, out)]
    try:
        result = subprocess.run(
            command, stdout=subprocess.DEVNULL, stderr=subprocess.PIPE, check=False
        )
    except OSError as exc:
        raise RuntimeError(f"[生成歌曲错误]ERROR: {exc}") from exc
    if result.returncode != 0:
        stderr = (result.stderr or b"").decode("utf-8", errors="replace")
        raise RuntimeError(f"[生成歌曲错误]ERROR: {stderr}")
    return [out / f"{index}.wav" for index in range(len(CUT_TIMES))]


def _names(entries: Iterable[_Entry]) -> list[str]:
    return [entry.name for entry in entries]