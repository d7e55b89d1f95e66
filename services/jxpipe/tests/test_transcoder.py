import random
import re

import pytest
from lxml import etree

from jxpipe.responder import render_document
from jxpipe.transcoder import encode_container, encode_value, escape_xml
from jxpipe.values import Array, Bool, NULL, Number, Object, String, parse_json


def test_escape_xml_replaces_ampersand_first():
    assert escape_xml("a & b < c") == "a &amp; b &lt; c"
    assert escape_xml("&lt;") == "&amp;lt;"


def test_escape_xml_handles_all_reserved_characters():
    assert escape_xml("<tag attr=\"x\" other='y'>&</tag>") == (
        "&lt;tag attr=&quot;x&quot; other=&apos;y&apos;&gt;&amp;&lt;/tag&gt;"
    )


def test_escape_xml_stringifies_scalars():
    assert escape_xml("") == ""
    assert escape_xml(True) == "true"
    assert escape_xml(False) == "false"
    assert escape_xml(None) == "null"
    assert escape_xml(7) == "7"
    assert escape_xml(Number("1.50e3")) == "1.50e3"


def test_escape_xml_rejects_containers():
    with pytest.raises(TypeError):
        escape_xml([1, 2])


def test_array_maps_to_item_siblings():
    assert encode_value([1, 2, 3]) == "<item>1</item><item>2</item><item>3</item>"


def test_empty_key_falls_back_to_placeholder_tag():
    assert encode_value({"": "x"}) == "<empty_key>x</empty_key>"


def test_null_entry_is_self_closing():
    assert encode_value({"a": None}) == "<a/>"
    assert encode_value([None, 1]) == "<item/><item>1</item>"


def test_top_level_scalars_are_wrapped_in_value():
    assert encode_value(42) == "<value>42</value>"
    assert encode_value('he said "hi"') == "<value>he said &quot;hi&quot;</value>"
    assert encode_value(True) == "<value>true</value>"
    assert encode_value(None) == "<value>null</value>"
    assert encode_value("") == "<value></value>"


def test_nested_structures():
    assert encode_value({"a": {"b": 1}}) == "<a><b>1</b></a>"
    assert encode_value({"a": [{"b": 1, "c": 2}, {"b": 3}]}) == (
        "<a><item><b>1</b><c>2</c></item><item><b>3</b></item></a>"
    )
    assert encode_value({"a": [[1, 2], [3]]}) == (
        "<a><item><item>1</item><item>2</item></item><item><item>3</item></item></a>"
    )


def test_empty_containers():
    assert encode_value({}) == ""
    assert encode_value([]) == ""
    assert encode_value({"a": {}, "b": []}) == "<a></a><b></b>"


def test_object_entry_order_is_preserved():
    value = Object((("zeta", Number("1")), ("alpha", Number("2")), ("mid", Number("3"))))
    assert encode_value(value) == "<zeta>1</zeta><alpha>2</alpha><mid>3</mid>"

    parsed = parse_json('{"b": 1, "a": 2}')
    assert encode_value(parsed) == "<b>1</b><a>2</a>"


def test_keys_are_not_sanitized():
    assert encode_value({"1st key": "x"}) == "<1st key>x</1st key>"


def test_scalar_text_is_escaped_inside_entries():
    assert encode_value({"q": "Tom & Jerry's <show>"}) == (
        "<q>Tom &amp; Jerry&apos;s &lt;show&gt;</q>"
    )


def test_number_literals_are_kept_verbatim():
    assert encode_value(parse_json('{"a": 1.0, "b": -2e10, "c": 10}')) == (
        "<a>1.0</a><b>-2e10</b><c>10</c>"
    )


def test_encode_container_accepts_tagged_values():
    value = Array((String("x"), Bool(False), NULL, Object()))
    assert encode_container(value) == "<item>x</item><item>false</item><item/><item></item>"


def test_encode_container_rejects_scalars():
    with pytest.raises(TypeError):
        encode_container("text")


_KEY_ALPHABET = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_0123456789"
_TEXT_ALPHABET = "ab &<>\"'é中\n\t;#="
_TEXT_ESCAPED = re.compile(r"&(?!(amp|lt|gt|quot|apos);)")


def _random_key(rng: random.Random) -> str:
    first = rng.choice(_KEY_ALPHABET[:53])
    return first + "".join(rng.choice(_KEY_ALPHABET) for _ in range(rng.randint(0, 6)))


def _random_value(rng: random.Random, depth: int):
    kind = rng.randint(0, 7 if depth < 4 else 4)
    if kind == 0:
        return None
    if kind == 1:
        return rng.choice([True, False])
    if kind == 2:
        return rng.choice([0, -17, 3.25, 1e21, 123456789])
    if kind in (3, 4):
        return "".join(rng.choice(_TEXT_ALPHABET) for _ in range(rng.randint(0, 12)))
    if kind in (5, 6):
        return {_random_key(rng): _random_value(rng, depth + 1) for _ in range(rng.randint(0, 4))}
    return [_random_value(rng, depth + 1) for _ in range(rng.randint(0, 4))]


@pytest.mark.parametrize("seed", range(50))
def test_documents_are_well_formed(seed):
    rng = random.Random(seed)
    value = _random_value(rng, 0)
    fragment = encode_value(value)

    root = etree.fromstring(render_document(fragment).encode("utf-8"))

    assert root.tag == "root"
    assert not _TEXT_ESCAPED.search(fragment)


def test_text_content_round_trips_through_parser():
    value = {"note": "5 > 3 & 'quoted' \"text\" <b>"}
    root = etree.fromstring(render_document(encode_value(value)).encode("utf-8"))

    assert root.findtext("note") == value["note"]


def test_array_items_are_addressable_by_xpath():
    root = etree.fromstring(render_document(encode_value([{"id": 1}, {"id": 2}])).encode("utf-8"))

    assert [item.findtext("id") for item in root.xpath("//root/item")] == ["1", "2"]
