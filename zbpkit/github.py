"""Repository search on GitHub."""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Mapping
from typing import Any
from urllib.parse import urlencode

import requests

SEARCH_API = "https://api.github.com/search/repositories"
OPENGRAPH_PREFIX = "https://opengraph.githubassets.com/0/"
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/88.0.4324.182 Safari/537.36"
)

_COMMAND_RE = re.compile(r">github[\t\n\f\r ](-.{1,10}? )?(.*)")


def notnull(text: str) -> str:
    """The text, or "None" when it is empty."""
    return text if text else "None"


def build_search_url(query: str) -> str:
    return f"{SEARCH_API}?{urlencode({'q': query})}"


def parse_command(text: str) -> tuple[str, str] | None:
    """Split a search command into (option, query); option is "" when absent."""
    match = _COMMAND_RE.fullmatch(text)
    if match is None:
        return None
    return match.group(1) or "", match.group(2)


def _str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _int(value: Any) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return 0


def format_repo(repo: Mapping[str, Any]) -> str:
    """Text summary of a repository entry from the search results."""
    license_info = repo.get("license")
    license_key = _str(license_info.get("key")) if isinstance(license_info, Mapping) else ""
    return (
        f"{_str(repo.get('full_name'))}\n"
        f"Description: {_str(repo.get('description'))}\n"
        f"Star/Fork/Issue: {_int(repo.get('watchers'))}/{_int(repo.get('forks'))}"
        f"/{_int(repo.get('open_issues'))}\n"
        f"Language: {notnull(_str(repo.get('language')))}\n"
        f"License: {notnull(license_key.upper())}\n"
        f"Last pushed: {_str(repo.get('pushed_at'))}\n"
        f"Jump: {_str(repo.get('html_url'))}\n"
    )


def _default_get(url: str, headers: Mapping[str, str]) -> tuple[int, bytes]:
    response = requests.get(url, headers=dict(headers), timeout=30)
    return response.status_code, response.content


def search(
    query: str,
    get: Callable[[str, Mapping[str, str]], tuple[int, bytes]] | None = None,
) -> dict[str, Any]:
    """First repository matching the query.

    `get` takes a URL and headers and returns (status code, body).
    """
    status, body = (get or _default_get)(
        build_search_url(query), {"User-Agent": USER_AGENT}
    )
    if status != 200:
        raise RuntimeError(f"code {status}")
    info = json.loads(body)
    items = info.get("items") or []
    if _int(info.get("total_count")) == 0 or not items:
        raise LookupError("没有找到这样的仓库")
    return items[0]