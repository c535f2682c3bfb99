from zbpkit.gifcmd import (
    UserContext,
    avatar_url,
    build_pattern,
    command_names,
    material_range,
    material_url,
    parse_command,
)


def test_command_names_unique_and_known():
    names = command_names()
    assert len(names) == len(set(names))
    assert "摸" in names
    assert "一直" in names


def test_parse_plain_number():
    assert parse_command("摸123456") == ("摸", "123456", [""])


def test_parse_mention_with_text():
    parsed = parse_command("阿尼亚喜欢 hi[CQ:at,qq=123456]")
    assert parsed is not None
    command, target, args = parsed
    assert command == "阿尼亚喜欢"
    assert target == "123456"
    assert args == ["", "hi"]


def test_parse_image():
    image_id = "a" * 32
    parsed = parse_command(f"旋转[CQ:image,file={image_id}.image]")
    assert parsed is not None
    assert parsed[0] == "旋转"
    assert parsed[1] == image_id


def test_parse_rejects_other_text():
    assert parse_command("hello") is None
    assert parse_command("摸") is None


def test_longer_command_preferred():
    parsed = parse_command("舔屏123456")
    assert parsed is not None
    assert parsed[0] == "舔屏"


def test_build_pattern_custom():
    pattern = build_pattern(["ab", "a"])
    match = pattern.fullmatch("ab42")
    assert match is not None
    assert match.group(1) == "ab"


def test_avatar_url():
    assert avatar_url("123") == "http://q4.qlogo.cn/g?b=qq&nk=123&s=640"
    assert avatar_url("abc") == "https://gchat.qpic.cn/gchatpic_new//--ABC/0"


def test_material_urls():
    assert material_range("mo", 3) == ["mo/0.png", "mo/1.png", "mo/2.png"]
    assert material_url("mo/0.png").endswith("/mo/0.png")


def test_user_context(tmp_path):
    context = UserContext(tmp_path, 42)
    assert context.usrdir == tmp_path / "users" / "42"
    assert context.usrdir.is_dir()
    assert [p.name for p in context.headimgsdir] == ["0.gif", "1.gif"]