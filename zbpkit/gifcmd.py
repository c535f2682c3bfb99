"""Commands of the picture maker: matching, avatar sources and per-user folders."""

from __future__ import annotations

import re
from pathlib import Path

MATERIAL_BASE = "https://gitcode.net/m0_60838134/imagematerials/-/raw/main/"
QQ_AVATAR = "http://q4.qlogo.cn/g?b=qq&nk={}&s=640"
CHAT_IMAGE = "https://gchat.qpic.cn/gchatpic_new//--{}/0"

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")

COMMANDS = (
    "搓", "冲", "摸", "拍", "丢", "吃", "敲", "啃", "蹭", "爬", "撕", "灰度",
    "上翻", "下翻", "左翻", "右翻", "反色", "浮雕", "打码", "负片", "旋转", "变形",
    "亲", "结婚申请", "结婚登记", "阿尼亚喜欢", "像只", "我永远喜欢", "永远喜欢",
    "像样的亲亲", "国旗", "不要靠近", "万能表情", "空白表情", "采访", "需要",
    "你可能需要", "这像画吗", "小画家", "完美", "玩游戏", "出警", "警察", "舔",
    "舔屏", "prpr", "安全感", "精神支柱", "想什么", "墙纸", "为什么at我", "交个朋友",
    "打工人", "继续干活", "兑换券", "注意力涣散", "垃圾桶", "垃圾", "捶", "啾啾",
    "2敲", "听音乐", "永远爱你", "2拍", "顶", "捣", "打拳", "滚", "吸", "嗦", "扔",
    "锤", "紧贴", "紧紧贴着", "转", "蒙蔽", "踩", "好玩", "2转", "2滚", "踢球",
    "2舔", "可莉吃", "胡桃啃", "怀", "砰", "你犯法了", "炖", "2蹭", "诶嘿", "膜拜",
    "吞", "揍", "给我变", "玩一下", "不要看", "小天使", "你的", "我老婆", "远离",
    "抬棺", "一直",
)

_TAIL = (
    r")[\s\S]*?(\[CQ:(image,file=([0-9a-zA-Z]{32}).*|at.+?([0-9]{5,11}))\].*|([0-9]+))"
)


class UserContext:
    """Working folder of one user and the paths of the two avatars in it."""

    def __init__(self, datapath: str | Path, user: int) -> None:
        self.usrdir = Path(datapath) / "users" / str(user)
        self.usrdir.mkdir(parents=True, exist_ok=True)
        self.headimgsdir = [self.usrdir / "0.gif", self.usrdir / "1.gif"]


def command_names() -> tuple[str, ...]:
    """Every command word the picture maker answers to."""
    return COMMANDS


def build_pattern(commands) -> re.Pattern[str]:
    """Regex matching a command followed by an image, a mention or a number.

    Longer command words are tried first so that a word is not cut short
    by another word that begins it.
    """
    ordered = sorted(commands, key=len, reverse=True)
    return re.compile("(" + "|".join(map(re.escape, ordered)) + _TAIL)


_PATTERN = build_pattern(COMMANDS)


def parse_command(text: str) -> tuple[str, str, list[str]] | None:
    """Split a message into (command, target, arguments), or None.

    The target is an image id, a mentioned user or a plain number; the
    arguments are the words between the command and the target.
    """
    match = _PATTERN.fullmatch(text)
    if match is None:
        return None
    command = match.group(1)
    tail = match.group(2)
    target = "".join(match.group(i) or "" for i in (4, 5, 6))
    middle = text[len(command) :]
    if tail and middle.endswith(tail):
        middle = middle[: -len(tail)]
    return command, target, middle.split(" ")


def avatar_url(value: str) -> str:
    """Where to download a picture: a QQ avatar for a number, else a chat image."""
    if _INTEGER_RE.fullmatch(value) and _INT64_MIN <= int(value) <= _INT64_MAX:
        return QQ_AVATAR.format(value)
    return CHAT_IMAGE.format(value.upper())


def material_url(name: str) -> str:
    """Download address of a material picture."""
    return MATERIAL_BASE + name


def material_range(prefix: str, end: int) -> list[str]:
    """Names of the numbered frames 0..end-1 of a material."""
    return [f"{prefix}/{i}.png" for i in range(end)]