import pytest

from workhub_common.json_fields import encode_json_list, parse_json_list


@pytest.mark.parametrize("values", [
    [],
    ["555-1111", "555-2222"],
    ["urgent", "review", "urgent"],
    ["ñandú", "café", "名前"],
])
def test_round_trip_preserves_order(values):
    encoded = encode_json_list(values)
    assert isinstance(encoded, str)
    assert parse_json_list(encoded) == values
    assert parse_json_list(encode_json_list(parse_json_list(encoded))) == values


def test_encode_absent_or_empty_is_empty_array():
    assert encode_json_list(None) == "[]"
    assert encode_json_list([]) == "[]"


def test_list_passes_through():
    values = ["a", "b"]
    assert parse_json_list(values) is values


@pytest.mark.parametrize("stored", [None, "", "not json", "{\"a\": 1}", "\"text\"", 42, b"[broken"])
def test_malformed_values_decode_to_default(stored):
    assert parse_json_list(stored) == []


def test_custom_default():
    fallback = ["General"]
    assert parse_json_list("{oops", default=fallback) == fallback
    assert parse_json_list(None, default=fallback) == fallback


def test_objects_inside_list_survive():
    links = [{"type": "github", "url": "https://github.com/ana"}]
    assert parse_json_list(encode_json_list(links)) == links
