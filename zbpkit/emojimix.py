"""Combine two emoji into one picture from the emoji kitchen image set."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence

import requests

_URL_TEMPLATE = (
    "https://www.gstatic.com/android/keyboard/emojikitchen/{date}/u{a:x}/u{a:x}_u{b:x}.png"
)

_DATE_2020 = 20201001

_RELEASED_2020 = (
    128516, 128512, 128578, 128579, 128521, 128522, 128518, 128515, 128513, 129315,
    128517, 128514, 128519, 129392, 128525, 128536, 129321, 128535, 128538, 128537,
    128539, 128541, 128523, 129394, 129297, 128540, 129303, 129323, 129300, 129325,
    129320, 129296, 128528, 128529, 128566, 129322, 128527, 128530, 128580, 128556,
    129317, 128524, 128532, 128554, 129316, 128564, 128567, 129298, 129301, 129314,
    129326, 129319, 129397, 129398, 128565, 129396, 129327, 129312, 129395, 129400,
    129488, 128526, 128533, 128543, 128577, 128559, 128562, 129299, 128563, 129402,
    128551, 128552, 128550, 128560, 128549, 128557, 128553, 128546, 128547, 128544,
    128531, 128534, 129324, 128542, 128555, 128548, 129393, 128169, 128545, 128561,
    128127, 128128, 128125, 128520, 129313, 128123, 129302, 128175, 128064, 127801,
    127804, 127799, 127797, 127821, 127874, 129473, 129440, 128144, 127789, 128139,
    127875, 129472, 9749, 127882, 127880, 9924, 128142, 127794, 128584, 128148,
    128140, 128152, 128159, 128158, 128147, 128149, 128151, 129505, 128155, 128156,
    128154, 128153, 129294, 129293, 128420, 128150, 128157, 128240, 128302, 128081,
    128055, 127771, 129420, 128171, 128049, 129409, 128293, 129415, 127752, 128053,
    128029, 128034, 128025, 129433, 128060, 128040, 129445, 128048, 129428, 128045,
    127757, 127774, 127775, 11088, 127772, 129361,
)

_RELEASED_LATER = {
    128558: 20210218,  # face exhaling
    127751: 20210831,  # sunset
    127911: 20210521,  # headphone
    127800: 20210218,  # cherry blossom
    129410: 20210218,  # scorpion
    10084: 20210218,  # heart
    127873: 20211115,  # wrapped gift
    129717: 20211115,  # wood
    127942: 20211115,  # trophy
    127838: 20210831,  # bread
    129412: 20210831,  # unicorn
    129668: 20210521,  # magic wand
    128038: 20210831,  # bird
    129417: 20210831,  # owl
    128016: 20210831,  # goat
    128059: 20210831,  # bear
    128054: 20211115,  # dog
    128041: 20211115,  # poodle
    129437: 20211115,  # raccoon
    128039: 20211115,  # penguin
    128012: 20210218,  # snail
    128031: 20210831,  # fish
    127820: 20211115,  # banana
    127827: 20210831,  # strawberry
    127819: 20210521,  # lemon
    127818: 20211115,  # tangerine
}

EMOJIS: dict[str, int] = {chr(code): _DATE_2020 for code in _RELEASED_2020}
EMOJIS.update({chr(code): date for code, date in _RELEASED_LATER.items()})

QQ_FACES: dict[int, str] = {
    face: chr(code)
    for face, code in {
        0: 128558, 1: 128556, 2: 128525, 4: 128526, 5: 128557, 6: 129402,
        7: 129296, 8: 128554, 11: 128545, 12: 128539, 13: 128513, 14: 128578,
        15: 128577, 16: 128526, 19: 129326, 20: 129325, 21: 128522, 23: 128533,
        24: 128523, 27: 128531, 28: 128516, 31: 129324, 32: 129300, 33: 129323,
        34: 128565, 35: 128547, 37: 128128, 46: 128055, 53: 127874, 59: 128169,
        60: 9749, 63: 127801, 66: 10084, 67: 128148, 69: 127873, 74: 127774,
        75: 127772, 96: 128517, 104: 129393, 109: 128535, 110: 128562,
        111: 129402, 172: 128539, 182: 128514, 187: 128123, 247: 128567,
        272: 128579, 320: 129395, 325: 128561,
    }.items()
}

Segment = Mapping[str, object]


def face_to_emoji(segment: Segment) -> str | None:
    """The emoji a message segment stands for, or None.

    A text segment of exactly one character yields that character; a QQ
    face segment yields its mapped emoji.
    """
    kind = segment.get("type")
    data = segment.get("data") or {}
    if kind == "text":
        text = str(data.get("text", ""))
        return text if len(text) == 1 else None
    if kind != "face":
        return None
    try:
        face_id = int(str(data.get("id", "")))
    except ValueError:
        return None
    return QQ_FACES.get(face_id)


def match_message(
    segments: Sequence[Segment], raw_message: str
) -> tuple[str, str] | None:
    """The two mixable emoji of a message, or None when it is not a mix request."""
    if len(segments) == 2:
        first = face_to_emoji(segments[0])
        if first not in EMOJIS:
            return None
        second = face_to_emoji(segments[1])
        if second not in EMOJIS:
            return None
        return first, second
    if len(raw_message) == 2:
        first, second = raw_message
        if first in EMOJIS and second in EMOJIS:
            return first, second
    return None


def mix_urls(first: str, second: str) -> tuple[str, str]:
    """Candidate picture URLs for the pair, in both orders."""
    for emoji in (first, second):
        if emoji not in EMOJIS:
            raise ValueError(f"emoji {emoji!r} cannot be mixed")
    a, b = ord(first), ord(second)
    return (
        _URL_TEMPLATE.format(date=EMOJIS[first], a=a, b=b),
        _URL_TEMPLATE.format(date=EMOJIS[second], a=b, b=a),
    )


def _default_head(url: str) -> int:
    response = requests.head(url, allow_redirects=True, timeout=30)
    response.close()
    return response.status_code


def find_mix(
    first: str, second: str, head: Callable[[str], int] | None = None
) -> str | None:
    """The first candidate URL that answers HEAD with 200, or None.

    `head` takes a URL and returns the status code; errors it raises
    count as a miss.
    """
    probe = head or _default_head
    for url in mix_urls(first, second):
        try:
            status = probe(url)
        except OSError:
            continue
        if status == 200:
            return url
    return None