import pytest

from polygraph.color_hex import Color, color_from_hex, color_to_hex


def test_color_from_hex_rgb():
    assert color_from_hex("#00ff00") == Color.from_rgb(0, 255, 0)
    assert color_from_hex("#5577AA") == Color.from_rgb(85, 119, 170)


def test_color_from_hex_rgba_mixed_case():
    assert color_from_hex("#E2e2e277") == Color.from_rgba_premultiplied(
        226, 226, 226, 119
    )


def test_color_from_hex_rejects_missing_hash():
    with pytest.raises(ValueError):
        color_from_hex("abcdefgh")


@pytest.mark.parametrize("text", ["#12345", "#gg0000", "#1234567", "", "#", "# 10000"])
def test_color_from_hex_rejects_invalid(text):
    with pytest.raises(ValueError):
        color_from_hex(text)


def test_color_to_hex():
    assert color_to_hex(Color.from_rgb(0, 255, 0)) == "#00ff00"
    assert color_to_hex(Color.from_rgb(85, 119, 170)) == "#5577aa"
    assert (
        color_to_hex(Color.from_rgba_premultiplied(226, 226, 226, 119)) == "#e2e2e277"
    )


def test_opaque_alpha_is_omitted():
    assert color_to_hex(color_from_hex("#5577AAFF")) == "#5577aa"


@pytest.mark.parametrize("text", ["#3f3f3f", "#fefefe", "#266dd3", "#e2e2e277"])
def test_round_trip(text):
    assert color_to_hex(color_from_hex(text)) == text


def test_channel_range_is_checked():
    with pytest.raises(ValueError):
        Color(256, 0, 0)