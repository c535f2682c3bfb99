import pytest

from zbpkit.guessgame import GuessRound, MusicInfo, Outcome, parse_music_name


def make_round(owner=1):
    return GuessRound(parse_music_name("Song - Singer - Anime&OP.mp3"), owner)


def test_parse_full_name():
    info = parse_music_name("Song - Singer - Anime&OP.mp3")
    assert info == MusicInfo("Song", "Singer", "Anime&OP")


def test_answer_text_with_alias():
    info = parse_music_name("Song - Singer - Anime&OP.mp3")
    assert info.answer_text() == "歌名:Song\n歌手:Singer\n其他信息:\nAnime\nOP"


def test_answer_text_without_alias():
    info = parse_music_name("Song - Singer.wav")
    assert info.alias is None
    assert info.answer_text() == "歌名:Song\n歌手:Singer"


def test_bad_extension():
    with pytest.raises(ValueError, match="不是音乐后缀"):
        parse_music_name("Song - Singer.txt")


def test_bad_naming():
    with pytest.raises(ValueError, match="命名不符合命名规则"):
        parse_music_name("Song.mp3")


def test_correct_name_case_insensitive():
    assert make_round().answer("-song", 5) is Outcome.CORRECT_NAME


def test_correct_by_substring():
    assert make_round().answer("-Sin", 5) is Outcome.CORRECT_SINGER


def test_correct_alias():
    outcome = make_round().answer("-Anime", 5)
    assert outcome is Outcome.CORRECT_ALIAS
    assert outcome.finished


def test_cancel_only_by_owner():
    game = make_round(owner=7)
    assert game.answer("-取消", 8) is Outcome.FORBIDDEN
    assert game.answer("-取消", 7) is Outcome.CANCELLED


def test_hints_run_out():
    game = make_round()
    assert game.answer("-提示", 2) is Outcome.HINT
    assert game.music_count == 1
    assert game.hint() is Outcome.HINT
    assert game.music_count == 2
    assert game.hint() is Outcome.NO_MORE_HINTS


def test_timeout_clips():
    game = make_round()
    assert [game.timeout_clip() for _ in range(3)] == [1, 2, None]


def test_wrong_answers_until_failure():
    game = make_round()
    outcomes = [game.answer("-nothing", 2) for _ in range(7)]
    assert outcomes[:2] == [Outcome.WRONG_NEXT_CLIP, Outcome.WRONG_NEXT_CLIP]
    assert outcomes[2:6] == [Outcome.WRONG] * 4
    assert outcomes[6] is Outcome.FAILED
    assert all(o.plays_clip for o in outcomes[:2])
    assert not any(o.finished for o in outcomes[:6])