from __future__ import annotations

import pytest

from polly_ssml.errors import MalformedTagError
from polly_ssml.tokenizer import EndTag, StartTag, Text, parse_tag_body, tokenize


def test_text_without_markers_is_a_single_item() -> None:
    assert list(tokenize("hey world")) == [Text("hey world")]


def test_empty_input_is_a_single_empty_text() -> None:
    assert list(tokenize("")) == [Text("")]


def test_items_keep_document_order() -> None:
    items = list(tokenize("a ${p}b${/p} c"))
    assert items == [Text("a "), StartTag("p", {}), Text("b"), EndTag("p"), Text(" c")]


def test_start_tag_with_params() -> None:
    items = list(tokenize("${break|strength=strong|time=4s}"))
    assert items == [StartTag("break", {"strength": "strong", "time": "4s"})]


def test_end_tag_body_is_not_split() -> None:
    assert list(tokenize("${/prosody|rate=fast}")) == [EndTag("prosody|rate=fast")]


def test_shortest_run_to_closing_brace() -> None:
    items = list(tokenize("${p}}"))
    assert items == [StartTag("p", {}), Text("}")]


def test_tag_body_may_span_lines() -> None:
    assert list(tokenize("${sub|alias=a\nb}")) == [StartTag("sub", {"alias": "a\nb"})]


def test_escaped_opener_stays_text() -> None:
    assert list(tokenize("a $\\{not a tag}")) == [Text("a $\\{not a tag}")]


@pytest.mark.parametrize("text", ["hello ${p", "x ${/p", "${", "${/", "ok ${p} then ${s"])
def test_unterminated_tag_raises(text: str) -> None:
    with pytest.raises(MalformedTagError) as exc:
        list(tokenize(text))
    assert text.endswith(exc.value.remainder)
    assert exc.value.remainder.startswith("${")


def test_tokenize_is_lazy() -> None:
    items = tokenize("${p}x${/p} ${broken")
    assert next(items) == StartTag("p", {})
    assert next(items) == Text("x")
    assert next(items) == EndTag("p")
    assert next(items) == Text(" ")
    with pytest.raises(MalformedTagError):
        next(items)


def test_parse_tag_body_without_pipe() -> None:
    assert parse_tag_body("amazon:effect") == ("amazon:effect", {})


def test_parse_tag_body_last_duplicate_wins() -> None:
    assert parse_tag_body("mark|name=a|name=b") == ("mark", {"name": "b"})


def test_parse_tag_body_stops_at_segment_without_equals() -> None:
    name, params = parse_tag_body("prosody|rate=fast|oops|volume=loud")
    assert name == "prosody"
    assert params == {"rate": "fast"}


def test_parse_tag_body_trailing_pipe() -> None:
    assert parse_tag_body("p|") == ("p", {})


def test_parse_tag_body_extra_equals_keeps_second_piece() -> None:
    assert parse_tag_body("sub|alias=a=b") == ("sub", {"alias": "a"})


def test_parse_tag_body_empty_value() -> None:
    assert parse_tag_body("lang|lang=") == ("lang", {"lang": ""})
