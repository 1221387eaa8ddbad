import pytest

from jsonmodel.utf import (
    utf8_check_first,
    utf8_check_full,
    utf8_check_string,
    utf8_encode,
    utf8_iterate,
)

SAMPLE_CODEPOINTS = [0x0, 0x41, 0x7F, 0x80, 0x7FF, 0x800, 0x20AC, 0xFFFF, 0x10000, 0x1F600, 0x10FFFF]


@pytest.mark.parametrize("codepoint", SAMPLE_CODEPOINTS)
def test_encode_matches_standard_encoder(codepoint):
    assert utf8_encode(codepoint) == chr(codepoint).encode("utf-8")


@pytest.mark.parametrize("codepoint", [-1, 0x110000])
def test_encode_rejects_out_of_range(codepoint):
    with pytest.raises(ValueError):
        utf8_encode(codepoint)


def test_encode_surrogate_is_rejected_by_check():
    encoded = utf8_encode(0xD800)
    assert len(encoded) == 3
    assert not utf8_check_string(encoded)


@pytest.mark.parametrize("codepoint", SAMPLE_CODEPOINTS)
def test_check_first_gives_sequence_length(codepoint):
    encoded = chr(codepoint).encode("utf-8")
    assert utf8_check_first(encoded[0]) == len(encoded)


@pytest.mark.parametrize("byte", [0x80, 0xBF, 0xC0, 0xC1, 0xF5, 0xFF])
def test_check_first_rejects_non_lead_bytes(byte):
    assert utf8_check_first(byte) == 0


def test_check_first_rejects_non_byte():
    with pytest.raises(ValueError):
        utf8_check_first(256)


@pytest.mark.parametrize("codepoint", [c for c in SAMPLE_CODEPOINTS if c >= 0x80])
def test_check_full_decodes(codepoint):
    assert utf8_check_full(chr(codepoint).encode("utf-8")) == codepoint


@pytest.mark.parametrize(
    "sequence",
    [
        b"\xc0\x80",  # overlong
        b"\xe0\x80\x80",  # overlong
        b"\xf0\x80\x80\x80",  # overlong
        b"\xed\xa0\x80",  # surrogate
        b"\xf4\x90\x80\x80",  # beyond range
        b"\xc3\x28",  # bad continuation
        b"A",  # single byte is not a multi-byte sequence
    ],
)
def test_check_full_rejects_invalid(sequence):
    assert utf8_check_full(sequence) is None


def test_iterate_yields_codepoints():
    text = "aé€😀z"
    assert list(utf8_iterate(text.encode("utf-8"))) == [ord(c) for c in text]


def test_iterate_empty():
    assert list(utf8_iterate(b"")) == []


def test_iterate_truncated_raises():
    data = "€".encode("utf-8")[:2]
    with pytest.raises(ValueError):
        list(utf8_iterate(b"ok" + data))


@pytest.mark.parametrize(
    "data",
    [
        b"",
        b"plain ascii",
        "ünïcödé".encode("utf-8"),
        "😀😀".encode("utf-8"),
        b"\xff",
        b"\x80abc",
        b"\xe2\x82",
        b"\xed\xb0\x80",
        b"\xc1\xbf",
        b"\xf4\x90\x80\x80",
    ],
)
def test_check_string_agrees_with_standard_decoder(data):
    try:
        data.decode("utf-8")
        expected = True
    except UnicodeDecodeError:
        expected = False
    assert utf8_check_string(data) is expected