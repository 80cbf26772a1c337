from xento.kernel import binary_to_text


def test_stops_at_nul():
    assert binary_to_text(b"hello\x00world") == "hello"


def test_without_nul_returns_everything():
    assert binary_to_text(b"xento") == "xento"


def test_leading_nul_gives_empty_text():
    assert binary_to_text(b"\x00abc") == ""


def test_each_byte_is_one_character():
    text = binary_to_text(bytes([0xE9, 0x41]))
    assert text == "\u00e9A"
    assert len(text) == 2


def test_accepts_bytearray():
    assert binary_to_text(bytearray(b"ab\x00")) == "ab"