import json
import subprocess
from pathlib import Path
from unittest import mock

import pytest

from zbpkit.musiclib import (
    Config,
    DefaultList,
    ListInfo,
    ListRaw,
    cut_music,
    ffmpeg_arguments,
    get_lists,
    music_lottery,
    pick_local_music,
)


def _library(tmp_path: Path) -> Path:
    root = tmp_path / "music"
    (root / "alpha").mkdir(parents=True)
    (root / "alpha" / "a - b.mp3").write_bytes(b"x")
    (root / "alpha" / "c - d.mp3").write_bytes(b"x")
    (root / "beta").mkdir()
    (root / "beta" / "e - f.mp3").write_bytes(b"x")
    (root / "stray.txt").write_text("not a list")
    return root


def test_config_round_trip(tmp_path):
    path = tmp_path / "config.json"
    config = Config(
        music_path="/music/",
        local=False,
        api=True,
        playlist=[ListRaw("alpha", 12)],
        defaultlist=[DefaultList(100, "alpha")],
    )
    config.save(path)
    assert Config.load(path) == config


def test_config_json_keys(tmp_path):
    path = tmp_path / "config.json"
    Config(music_path="/m/", defaultlist=[DefaultList(5, "x")]).save(path)
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["musicPath"] == "/m/"
    assert data["defaultlist"] == [{"gid": 5, "name": "x"}]


def test_missing_config_written_with_defaults(tmp_path):
    path = tmp_path / "config.json"
    config = Config.load(path)
    assert path.exists()
    assert config.playlist == [ListRaw("FM", 3136952023)]
    assert config.api is True and config.local is True
    assert config.music_path.endswith("/data/guessmusic/music/")


def test_null_lists_load_as_empty(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"musicPath": "/m/", "playlist": None, "defaultlist": None}))
    config = Config.load(path)
    assert config.playlist == []
    assert config.defaultlist == []


def test_get_lists(tmp_path):
    root = _library(tmp_path)
    config = Config(playlist=[ListRaw("beta", 42), ListRaw("alpha", 0)])
    assert get_lists(config, root) == [ListInfo("alpha", 2, 0), ListInfo("beta", 1, 42)]


def test_get_lists_empty_library(tmp_path):
    root = tmp_path / "none"
    with pytest.raises(LookupError):
        get_lists(Config(), root)
    assert root.is_dir()


def test_pick_local_music_skips_folders(tmp_path):
    (tmp_path / "lyrics").mkdir()
    (tmp_path / "song.mp3").write_bytes(b"x")
    entries = [tmp_path / "lyrics", tmp_path / "song.mp3"]
    assert pick_local_music(entries) == "song.mp3"


def test_pick_local_music_only_folder(tmp_path):
    (tmp_path / "lyrics").mkdir()
    assert pick_local_music([tmp_path / "lyrics"]) == ""


def test_music_lottery_picks_from_list(tmp_path):
    root = _library(tmp_path)
    folder, name = music_lottery(Config(), root, "alpha")
    assert folder == root / "alpha"
    assert (folder / name).is_file()


def test_music_lottery_unknown_list(tmp_path):
    root = _library(tmp_path)
    with pytest.raises(LookupError):
        music_lottery(Config(), root, "gamma")


def test_music_lottery_empty_list(tmp_path):
    root = _library(tmp_path)
    (root / "empty").mkdir()
    with pytest.raises(LookupError):
        music_lottery(Config(), root, "empty")


def test_ffmpeg_arguments(tmp_path):
    args = ffmpeg_arguments("song.mp3", tmp_path)
    assert args[:3] == ["-y", "-i", "song.mp3"]
    assert args[3:8] == ["-ss", "00:00:05", "-t", "10", str(tmp_path / "0.wav")]
    assert args[8:13] == ["-ss", "00:00:30", "-t", "10", str(tmp_path / "1.wav")]
    assert args[13:18] == ["-ss", "00:01:00", "-t", "10", str(tmp_path / "2.wav")]
    assert args[-1] == "-hide_banner"


def test_cut_music_runs_ffmpeg(tmp_path):
    out = tmp_path / "cache" / "1"
    done = subprocess.CompletedProcess([], 0, stderr=b"")
    with mock.patch("subprocess.run", return_value=done) as run:
        clips = cut_music("a.mp3", tmp_path, out)
    command = run.call_args.args[0]
    assert command[0] == "ffmpeg"
    assert command[1:] == ffmpeg_arguments(tmp_path / "a.mp3", out)
    assert clips == [out / "0.wav", out / "1.wav", out / "2.wav"]
    assert out.is_dir()


def test_cut_music_failure(tmp_path):
    failed = subprocess.CompletedProcess([], 1, stderr=b"bad input")
    with mock.patch("subprocess.run", return_value=failed):
        with pytest.raises(RuntimeError, match="bad input"):
            cut_music("a.mp3", tmp_path, tmp_path / "out")