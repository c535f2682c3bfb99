"""City epidemic statistics: parsing the area tree and formatting a report."""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

import requests

TX_URL = (
    "https://api.inews.qq.com/newsqa/v1/query/inner/publish/modules/list"
    "?modules=statisGradeCityDetail,diseaseh5Shelf"
)


def _int(value: Any) -> int:
    if value is None:
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


@dataclass
class Area:
    """Statistics of one area, with its sub-areas."""

    name: str = ""
    today_confirm: int = 0
    today_wzz_add: Any = None
    now_confirm: int = 0
    confirm: int = 0
    dead: int = 0
    heal: int = 0
    grade: str = ""
    wzz: int = 0
    children: list[Area] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Area:
        today = data.get("today") or {}
        total = data.get("total") or {}
        return cls(
            name=str(data.get("name") or ""),
            today_confirm=_int(today.get("confirm")),
            today_wzz_add=today.get("wzz_add"),
            now_confirm=_int(total.get("nowConfirm")),
            confirm=_int(total.get("confirm")),
            dead=_int(total.get("dead")),
            heal=_int(total.get("heal")),
            grade=str(total.get("grade") or ""),
            wzz=_int(total.get("wzz")),
            children=[cls.from_dict(child) for child in data.get("children") or []],
        )


def find_city(area: Area | None, name: str) -> Area | None:
    """Depth-first search of the area tree for an area with the given name."""
    if area is None:
        return None
    if area.name == name:
        return area
    for child in area.children:
        if child.name == name:
            return child
        found = find_city(child, name)
        if found is not None:
            return found
    return None


def parse_result(data: bytes | str | Mapping[str, Any]) -> tuple[Area, str]:
    """Root area and last update time from the service's response."""
    document = data if isinstance(data, Mapping) else json.loads(data)
    shelf = (document.get("data") or {}).get("diseaseh5Shelf") or {}
    tree = shelf.get("areaTree") or []
    if not tree:
        raise ValueError("response holds no area tree")
    return Area.from_dict(tree[0]), str(shelf.get("lastUpdateTime") or "")


def _default_fetch(url: str) -> bytes:
    response = requests.get(url, timeout=30)
    response.raise_for_status()
    return response.content


def query_epidemic(
    city: str, fetch: Callable[[str], bytes] | None = None
) -> tuple[Area | None, str]:
    """Look a city up; returns (area or None, last update time)."""
    if not city:
        raise ValueError("你还没有输入城市名字呢！")
    root, updated = parse_result((fetch or _default_fetch)(TX_URL))
    return find_city(root, city), updated


def _show(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_report(area: Area, updated: str) -> str:
    """Text report of one area's statistics."""
    return (
        f"【{area.name}】疫情数据\n"
        f"新增人数：{area.today_confirm}\n"
        f"现有确诊：{area.now_confirm}\n"
        f"累计确诊：{area.confirm}\n"
        f"治愈人数：{area.heal}\n"
        f"死亡人数：{area.dead}\n"
        f"无症状人数：{area.wzz}\n"
        f"新增无症状：{_show(area.today_wzz_add)}\n"
        f"更新时间：\n『{updated}』"
    )