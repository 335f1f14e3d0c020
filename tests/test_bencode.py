import io

import pytest

from bencode.decoder import decode
from bencode.encoder import encode
from bencode.structure import BencodeDict, BencodeInt, BencodeList, BencodeString, to_python


def test_int():
    obj = decode(b"i42e")
    assert isinstance(obj, BencodeInt)
    assert obj.value == 42
    assert encode(obj) == b"i42e"


def test_negative_int():
    obj = decode(b"i-3e")
    assert obj == BencodeInt(-3)
    assert encode(obj) == b"i-3e"


def test_zero():
    assert decode(b"i0e") == BencodeInt(0)
    assert encode(BencodeInt(0)) == b"i0e"


def test_int64_bounds():
    assert decode(b"i9223372036854775807e") == BencodeInt(2 ** 63 - 1)
    assert decode(b"i-9223372036854775808e") == BencodeInt(-(2 ** 63))


def test_string():
    obj = decode(b"4:spam")
    assert isinstance(obj, BencodeString)
    assert obj.value == b"spam"
    assert encode(obj) == b"4:spam"


def test_empty_string():
    assert decode(b"0:") == BencodeString(b"")


def test_binary_string():
    raw = bytes(range(256))
    obj = decode(b"256:" + raw)
    assert obj.value == raw


def test_list():
    obj = decode(b"l4:spam4:eggse")
    assert isinstance(obj, BencodeList)
    assert obj == BencodeList([BencodeString(b"spam"), BencodeString(b"eggs")])


def test_empty_containers():
    assert decode(b"le") == BencodeList([])
    assert decode(b"de") == BencodeDict({})


def test_dict():
    data = b"d3:cow3:moo4:spam4:eggse"
    obj = decode(data)
    assert isinstance(obj, BencodeDict)
    assert obj[b"cow"] == BencodeString(b"moo")
    assert obj[b"spam"] == BencodeString(b"eggs")
    assert encode(obj) == data


def test_nested():
    data = b"d4:dictd3:key5:value4:listl1:a1:bee5:hello5:worlde"
    obj = decode(data)
    assert to_python(obj) == {
        b"dict": {b"key": b"value", b"list": [b"a", b"b"]},
        b"hello": b"world",
    }
    assert encode(obj) == data


def test_empty_input_returns_none():
    assert decode(b"") is None
    assert decode(io.BytesIO(b"")) is None


def test_decode_from_stream_reads_one_value_at_a_time():
    stream = io.BytesIO(b"i1e4:spamli2ee")
    assert decode(stream) == BencodeInt(1)
    assert decode(stream) == BencodeString(b"spam")
    assert decode(stream) == BencodeList([BencodeInt(2)])
    assert decode(stream) is None


def test_trailing_bytes_left_in_stream():
    stream = io.BytesIO(b"i7exyz")
    assert decode(stream) == BencodeInt(7)
    assert stream.read() == b"xyz"


def test_canonical_ordering_ignores_insertion_order():
    d = BencodeDict({})
    d.value[b"spam"] = BencodeInt(1)
    d.value[b"cow"] = BencodeInt(2)
    d.value[b"abc"] = BencodeInt(3)
    assert encode(d) == b"d3:abci3e3:cowi2e4:spami1ee"


def test_keys_sorted_by_raw_bytes():
    # uppercase sorts before lowercase, high bytes after ASCII
    d = BencodeDict({b"\xff": BencodeInt(0), b"b": BencodeInt(0), b"B": BencodeInt(0)})
    assert encode(d) == b"d1:Bi0e1:bi0e1:\xffi0ee"


def test_unsorted_input_is_canonicalized():
    obj = decode(b"d4:spam4:eggs3:cow3:mooe")
    assert encode(obj) == b"d3:cow3:moo4:spam4:eggse"


def test_encode_native_python_values():
    assert encode(3) == b"i3e"
    assert encode("spam") == b"4:spam"
    assert encode(b"") == b"0:"
    assert encode([1, b"a"]) == b"li1e1:ae"
    assert encode({"spam": [1, 2], b"cow": "moo"}) == b"d3:cow3:moo4:spamli1ei2eee"


@pytest.mark.parametrize("bad", [True, 1.5, None, object(), {1: 2}])
def test_encode_rejects_unsupported(bad):
    with pytest.raises(TypeError):
        encode(bad)


def test_encode_rejects_out_of_range_int():
    with pytest.raises(OverflowError):
        encode(2 ** 63)


SAMPLES = [
    BencodeInt(-17),
    BencodeString(b"\x00\x01binary\xfe"),
    BencodeList([]),
    BencodeList([BencodeInt(1), BencodeList([BencodeString(b"x")]), BencodeDict({})]),
    BencodeDict({
        b"zeta": BencodeList([BencodeInt(2 ** 62), BencodeInt(-(2 ** 63))]),
        b"alpha": BencodeDict({b"inner": BencodeString(b"")}),
        b"": BencodeInt(0),
    }),
]


@pytest.mark.parametrize("value", SAMPLES)
def test_round_trip(value):
    assert decode(encode(value)) == value


@pytest.mark.parametrize("value", SAMPLES)
def test_canonical_encoding_is_idempotent(value):
    once = encode(value)
    assert encode(decode(once)) == once


def test_structural_equality():
    assert BencodeInt(1) == BencodeInt(1)
    assert BencodeInt(1) != BencodeString(b"1")
    assert BencodeDict({b"a": BencodeInt(1)}) == BencodeDict({b"a": BencodeInt(1)})
    assert BencodeString(b"abc") < BencodeString(b"abd")
    assert sorted([BencodeString(b"spam"), BencodeString(b"cow"), BencodeString(b"abc")]) == [
        BencodeString(b"abc"), BencodeString(b"cow"), BencodeString(b"spam")]


def test_structure_validation():
    with pytest.raises(TypeError):
        BencodeDict({"str-key": BencodeInt(1)})
    with pytest.raises(TypeError):
        BencodeInt(True)
    with pytest.raises(OverflowError):
        BencodeInt(2 ** 63)
    with pytest.raises(TypeError):
        BencodeList([1, 2])


def test_encode_rejects_str_and_bytes_key_collision():
    with pytest.raises(ValueError, match="more than one key"):
        encode({"a": 1, b"a": 2})


def test_sorted_items_gives_canonical_order():
    d = BencodeDict({b"spam": BencodeInt(1), b"cow": BencodeInt(2), b"abc": BencodeInt(3)})
    assert [k for k, _ in d.sorted_items()] == [b"abc", b"cow", b"spam"]
    assert list(d.value) == [b"spam", b"cow", b"abc"]
