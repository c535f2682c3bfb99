"""Card search and deck image requests for the Hearthstone card site."""

from __future__ import annotations

import re

SITE = "https://hs.fbigame.com"
API = "https://hs.fbigame.com/ajax.php?"
CARD_IMAGE = "https://res.fbigame.com/hs/v13/"
PARAMS = (
    "mod=get_cards_list&"
    "mode=-1&"
    "extend=-1&"
    "mutil_extend=&"
    "hero=-1&"
    "rarity=-1&"
    "cost=-1&"
    "mutil_cost=&"
    "techlevel=-1&"
    "type=-1&"
    "collectible=-1&"
    "isbacon=-1&"
    "page=1&"
    "search_type=1&"
    "deckmode=normal"
)
USER_AGENT = (
    "Mozilla/5.0 (Linux; Android 6.0; Nexus 5 Build/MRA58N) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/86.0.4240.198 Mobile Safari/537.36"
)

_HASH_MARK = 'var hash = "'
_DECK_RE = re.compile(r"[\s\S]*?(AAE[a-zA-Z0-9/+=]{70,})[\s\S]*")


def extract_hash(page: str) -> str:
    """The request hash embedded in the site's front page."""
    _, found, rest = page.partition(_HASH_MARK)
    if not found:
        raise ValueError("page holds no request hash")
    return rest.split('"', 1)[0]


def search_url(page_hash: str, query: str) -> str:
    return f"{API}{PARAMS}&hash={page_hash}&search={query}"


def deck_image_url(page_hash: str, code: str) -> str:
    return (
        f"{API}{PARAMS}mod=general_deck_image&deck_code={code}"
        f"&deck_text=&hash={page_hash}&search={code}"
    )


def match_deck_code(text: str) -> str | None:
    """The first deck code in the text, or None."""
    match = _DECK_RE.fullmatch(text)
    return match.group(1) if match else None