import pytest

from zbpkit.flags import (
    EventSwitches,
    GachaMode,
    decode_flag,
    encode_flag,
    parse_review_command,
    parse_switch_command,
)


def test_switches_start_off():
    s = EventSwitches()
    assert (s.apply_on(), s.invite_on(), s.master_off()) == (False, False, False)


def test_set_apply_is_independent():
    s = EventSwitches()
    s.set_apply(True)
    s.set_invite(True)
    assert s.apply_on() and s.invite_on()
    assert not s.master_off()
    s.set_apply(False)
    assert not s.apply_on()
    assert s.invite_on()


def test_set_master_toggles_bit():
    s = EventSwitches()
    s.set_master(True)
    assert s.master_off()
    s.set_master(False)
    assert not s.master_off()


def test_clearing_drops_high_bits():
    s = EventSwitches(value=0b1111)
    s.set_invite(False)
    assert s.value == 0b0101 & 0b101


def test_gacha_mode_toggle():
    g = GachaMode()
    assert not g.five_star_mode()
    assert g.set_mode(True) is True
    assert g.five_star_mode()
    assert g.set_mode(False) is False
    assert not g.five_star_mode()


def test_gacha_mode_keeps_other_bits():
    g = GachaMode(value=0b110)
    g.set_mode(True)
    g.set_mode(False)
    assert g.value == 0b110


def test_encode_zero():
    assert encode_flag("0") == "一一一一"


@pytest.mark.parametrize(
    "flag", ["1", "1234567890", "72057594037927935", "-1", str(-(1 << 55))]
)
def test_encode_shape(flag):
    encoded = encode_flag(flag)
    assert len(encoded) == 4
    assert all(0x4E00 <= ord(c) <= 0x4E00 + 0x3FFF for c in encoded)


@pytest.mark.parametrize("flag", ["0", "1", "987654321", "72057594037927935"])
def test_round_trip(flag):
    assert decode_flag(encode_flag(flag)) == flag


def test_encode_accepts_int():
    assert encode_flag(42) == encode_flag("42")


@pytest.mark.parametrize("flag", ["abc", "", str(1 << 63)])
def test_encode_invalid(flag):
    with pytest.raises(ValueError):
        encode_flag(flag)


def test_decode_wrong_length():
    with pytest.raises(ValueError):
        decode_flag("一一一")


def test_decode_out_of_range_char():
    with pytest.raises(ValueError):
        decode_flag("a一一一")


def test_parse_review_command():
    code = encode_flag("123456789")
    result = parse_review_command("同意申请 " + code + " 欢迎")
    assert result == (True, "申请", "123456789", "欢迎")


def test_parse_review_reject_without_reason():
    code = encode_flag("77")
    assert parse_review_command("拒绝邀请" + code) == (False, "邀请", "77", "")


def test_parse_review_no_match():
    assert parse_review_command("同意什么 一一一一") is None


@pytest.mark.parametrize(
    "text,expected",
    [
        ("开启自动同意申请", (True, "申请")),
        ("关闭自动同意邀请", (False, "邀请")),
        ("关闭自动同意主人", (False, "主人")),
    ],
)
def test_parse_switch_command(text, expected):
    assert parse_switch_command(text) == expected


def test_parse_switch_no_match():
    assert parse_switch_command("开启自动同意别的") is None