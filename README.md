# zbpkit

This package holds the logic of a set of chat-bot plugins as plain Python. You can call it from any bot framework. Each module takes text or data and returns results. Your bot does the sending.

## Installation

```
pip install zbpkit
```

The `test` extra installs pytest for the test suite.

## Modules

| Module | What it does |
| --- | --- |
| `zbpkit.flags` | `EventSwitches` holds the auto-approval bits for friend requests, group invites and the owner. `GachaMode` holds the five-star pool bit. `encode_flag` and `decode_flag` turn a numeric request flag into four CJK characters and back. `parse_review_command` and `parse_switch_command` read the approve/reject and switch commands. |
| `zbpkit.bottle` | `Sea` stores drift bottles in SQLite, one table per channel, and creates the `global` channel when it opens. `Bottle` is one stored message. Bottle ids come from `bottle_id`, a signed CRC-64/ISO (`crc64_iso`) of the bottle's fields. `parse_throw`, `parse_pick` and `parse_jump` read the commands. |
| `zbpkit.heisi` | `item_url` expands a packed 10-byte record into a picture URL. `load_items` splits a packed file into records. `Gallery` loads the `.bin` files of a folder and `pick` returns a random URL for a command. |
| `zbpkit.emojimix` | `face_to_emoji` and `match_message` recognise a pair of emoji or QQ faces. `mix_urls` builds the two candidate Emoji Kitchen URLs. `find_mix` returns the first URL that answers HEAD with 200. |
| `zbpkit.epidemic` | `Area` and `parse_result` read the statistics response. `find_city` searches the area tree. `query_epidemic` fetches and looks up a city. `format_report` formats the result as text. |
| `zbpkit.github` | `parse_command`, `build_search_url`, `search` (returns the first repository found), `format_repo` and `notnull`. |
| `zbpkit.hearthstone` | `extract_hash` reads the request hash from the site's front page. `search_url` and `deck_image_url` build the request URLs. `match_deck_code` finds a deck code in a message. |
| `zbpkit.jokes` | `JokeBook` is a SQLite table of jokes with `add`, `count` and `tell`. `render_joke` fills `%name` placeholders. |
| `zbpkit.musiclib` | `Config` (with `ListRaw` and `DefaultList`) loads and saves the JSON settings, and writes the defaults when the file is missing. `get_lists` lists the playlist folders as `ListInfo`. `music_lottery` and `pick_local_music` draw a random local track. `ffmpeg_arguments` and `cut_music` cut three ten-second clips with ffmpeg. |
| `zbpkit.guessgame` | `parse_music_name` reads `title - singer - other.ext` into `MusicInfo`. `GuessRound` judges answers, hints and timeouts, and returns an `Outcome`. |
| `zbpkit.fortune` | `offset`, `rows` and `text_layout` place the characters of the vertical fortune text. `theme_index` and `theme_for` map background themes to stored values. `cache_key` names the cached picture. |
| `zbpkit.gacha` | `Pool.from_names` builds a card pool from archive entry names. `roll` makes a pull and returns a `Roll` with the cards in layout order. `reply_text` and `display_name` build the five-star announcement. |
| `zbpkit.gifcmd` | `command_names`, `build_pattern` and `parse_command` cover the picture-making commands. `avatar_url`, `material_url` and `material_range` give download addresses. `UserContext` is a per-user working folder. |

## Examples

The auto-accept switches are kept in one integer:

```python
from zbpkit.flags import EventSwitches

switches = EventSwitches(0)
switches.set_invite(True)
assert switches.invite_on()
assert not switches.apply_on()
```

A request flag can be shortened to text and restored from it. The decoded flag is a string:

```python
from zbpkit.flags import encode_flag, decode_flag

text = encode_flag(1234567890)
assert len(text) == 4
assert decode_flag(text) == "1234567890"
```

Drift bottles:

```python
from zbpkit.bottle import Bottle, Sea

with Sea("sea.db") as sea:
    sea.throw(Bottle(qq=10001, grp=0, name="someone", msg="hello"), "global")
    bottle = sea.fetch("global", 12345)
    sea.destroy(bottle, "global")
```

Empty fields in GitHub results are shown as `None`:

```python
from zbpkit.github import notnull

assert notnull("") == "None"
assert notnull("Go") == "Go"
```

## Notes

- `cut_music` runs the `ffmpeg` program, so `ffmpeg` must be on your `PATH`.
- `find_mix`, `query_epidemic` and `search` accept a callable that performs the HTTP request. You can pass your own client or a stub. Without one they use `requests`.

## What the package does not do

- It does not connect to a chat service, register commands or send messages.
- It does not draw pictures. Fortune slips, gacha canvases and the picture-making commands are supported only as far as layouts, file choices and URLs.
- It does not download materials, avatars, card pictures or songs.
- `zbpkit.hearthstone` builds request URLs but does not fetch them.