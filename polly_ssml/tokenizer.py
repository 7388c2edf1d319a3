"""Splits `${tag}` annotated text into start tags, end tags and text runs."""
from dataclasses import dataclass, field
from typing import Dict, Iterator, Tuple, Union
import re

from polly_ssml.errors import MalformedTagError

TAG_OPENER = "${"

_START_TAG = re.compile(r"\$\{(?!/)(.*?)\}", re.DOTALL)
_END_TAG = re.compile(r"\$\{/(.*?)\}", re.DOTALL)


@dataclass(frozen=True)
class StartTag:
    name: str
    params: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class EndTag:
    name: str


@dataclass(frozen=True)
class Text:
    content: str


RawItem = Union[StartTag, EndTag, Text]


def parse_tag_body(body: str) -> Tuple[str, Dict[str, str]]:
    """Split `name|key=value|...` into the tag name and its parameters.

    Parsing stops at the first segment without an `=`; anything after it is
    dropped. Later duplicates of a key overwrite earlier ones.
    """
    if "|" not in body:
        return body, {}

    name, *segments = body.split("|")
    params: Dict[str, str] = {}
    for segment in segments:
        pieces = segment.split("=")
        if len(pieces) < 2:
            break
        params[pieces[0]] = pieces[1]
    return name, params


def tokenize(text: str) -> Iterator[RawItem]:
    """Yield the items of `text` in document order.

    Raises MalformedTagError when a `${` has no closing `}` after it.
    """
    if TAG_OPENER not in text:
        yield Text(text)
        return

    pos = 0
    end = len(text)
    while pos < end:
        if text.startswith(TAG_OPENER, pos):
            m = _START_TAG.match(text, pos)
            if m:
                name, params = parse_tag_body(m.group(1))
                yield StartTag(name, params)
                pos = m.end()
                continue
            m = _END_TAG.match(text, pos)
            if m:
                yield EndTag(m.group(1))
                pos = m.end()
                continue
            raise MalformedTagError(text[pos:])

        nxt = text.find(TAG_OPENER, pos)
        if nxt == -1:
            nxt = end
        yield Text(text[pos:nxt])
        pos = nxt
