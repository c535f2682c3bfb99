import pytest

from zbpkit.hearthstone import (
    API,
    PARAMS,
    deck_image_url,
    extract_hash,
    match_deck_code,
    search_url,
)


def test_extract_hash():
    page = '<script>var x = 1; var hash = "abc123"; var y = 2;</script>'
    assert extract_hash(page) == "abc123"


def test_extract_hash_missing():
    with pytest.raises(ValueError):
        extract_hash("<html></html>")


def test_search_url_shape():
    url = search_url("h1", "火球")
    assert url.startswith(API + PARAMS)
    assert url.endswith("&hash=h1&search=火球")


def test_deck_image_url_shape():
    url = deck_image_url("h2", "CODE")
    assert url.startswith(API)
    assert "mod=general_deck_image&deck_code=CODE&deck_text=&hash=h2" in url
    assert url.endswith("&search=CODE")


def test_match_deck_code_inside_text():
    code = "AAE" + "Bc9/+=" * 12
    assert match_deck_code("我的卡组\n" + code + "\n#end") == code


def test_match_deck_code_too_short():
    assert match_deck_code("AAE" + "A" * 69) is None


def test_match_deck_code_stops_at_foreign_char():
    code = "AAE" + "x" * 75
    assert match_deck_code(code + "#" + "y" * 80) == code