"""Append-only XML output for the SSML document.

`XmlWriter` knows nothing about SSML: it writes elements, text and the XML
declaration with escaping. `SSMLWriter` adds one method per SSML element so the
parser never has to spell out tag or attribute names itself.
"""
from typing import List, Optional, Sequence, Tuple

from polly_ssml.errors import XmlWriterError
from polly_ssml.ssml_constants import (
    AmazonDomainName,
    AmazonEffect,
    AutoBreathFrequency,
    BreakStrength,
    BreakTime,
    BreathDuration,
    BreathVolume,
    PhonationVolume,
    PhonemeAlphabet,
    ProsodyRate,
    WordRole,
)

Attributes = Sequence[Tuple[str, str]]

XML_DECLARATION = '<?xml version="1.0"?>'
SSML_NAMESPACE = "http://www.w3.org/2001/10/synthesis"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"
DEFAULT_LANG = "en-US"
DEFAULT_ONLANGFAILURE = "processorchoice"

_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&apos;",
}
_ESCAPE_TABLE = str.maketrans(_ESCAPES)


def escape(value: str) -> str:
    """Escape a text node or attribute value."""
    return value.translate(_ESCAPE_TABLE)


class XmlWriter:
    """Writes XML events into an in-memory buffer.

    The declaration is written on creation. Nothing is closed for you:
    `render` returns exactly what was written so far and can be called any
    number of times.
    """

    def __init__(self):
        self._parts: List[str] = [XML_DECLARATION]

    def _start(self, name: str, attributes: Attributes) -> str:
        if not name:
            raise XmlWriterError("Element name must not be empty.")
        attrs = "".join(f' {key}="{escape(value)}"' for key, value in attributes)
        return f"<{name}{attrs}"

    def open_element(self, name: str, attributes: Attributes = ()) -> None:
        self._parts.append(self._start(name, attributes) + ">")

    def empty_element(self, name: str, attributes: Attributes = ()) -> None:
        self._parts.append(self._start(name, attributes) + "/>")

    def close_element(self, name: str) -> None:
        if not name:
            raise XmlWriterError("Element name must not be empty.")
        self._parts.append(f"</{name}>")

    def write_text(self, text: str) -> None:
        if text:
            self._parts.append(escape(text))

    def render(self) -> str:
        return "".join(self._parts)


class SSMLWriter(XmlWriter):
    """XmlWriter with a method per SSML element Polly supports."""

    def start_speak(self, lang: Optional[str] = None, onlangfailure: Optional[str] = None) -> None:
        """Open the root <speak> element, which wraps the whole document."""
        self.open_element("speak", [
            ("xml:lang", DEFAULT_LANG if lang is None else lang),
            ("onlangfailure", DEFAULT_ONLANGFAILURE if onlangfailure is None else onlangfailure),
            ("xmlns", SSML_NAMESPACE),
            ("xmlns:xsi", XSI_NAMESPACE),
        ])

    def end_speak(self) -> None:
        self.close_element("speak")

    def ssml_break(self, strength: Optional[BreakStrength] = None, time: Optional[BreakTime] = None) -> None:
        attrs = []
        if strength is not None:
            attrs.append(("strength", str(strength)))
        if time is not None:
            attrs.append(("time", str(time)))
        self.empty_element("break", attrs)

    def start_lang(self, lang: str, onlangfailure: Optional[str] = None) -> None:
        self.open_element("lang", [
            ("xml:lang", lang),
            ("onlangfailure", DEFAULT_ONLANGFAILURE if onlangfailure is None else onlangfailure),
        ])

    def start_mark(self, name: str) -> None:
        self.open_element("mark", [("name", name)])

    def start_paragraph(self) -> None:
        self.open_element("p")

    def start_sentence(self) -> None:
        self.open_element("s")

    def start_phoneme(self, alphabet: PhonemeAlphabet, ph: str) -> None:
        self.open_element("phoneme", [("alphabet", str(alphabet)), ("ph", ph)])

    def start_prosody(
        self,
        volume: Optional[str] = None,
        rate: Optional[ProsodyRate] = None,
        pitch: Optional[str] = None,
    ) -> None:
        """Open <prosody>; at least one attribute has to survive validation."""
        if volume is None and rate is None and pitch is None:
            raise XmlWriterError("Prosody tag was supplied no values.")
        attrs = []
        if volume is not None:
            attrs.append(("volume", volume))
        if rate is not None:
            attrs.append(("rate", str(rate)))
        if pitch is not None:
            attrs.append(("pitch", pitch))
        self.open_element("prosody", attrs)

    def start_say_as(self, interpret_as: str) -> None:
        self.open_element("say-as", [("interpret-as", interpret_as)])

    def start_sub(self, alias: str) -> None:
        self.open_element("sub", [("alias", alias)])

    def start_word(self, role: WordRole) -> None:
        self.open_element("w", [("role", str(role))])

    def start_amazon_effect(self, name: AmazonEffect) -> None:
        self.open_element("amazon:effect", [("name", str(name))])

    def start_vocal_tract_length(self, factor: str) -> None:
        self.open_element("amazon:effect", [("vocal-tract-length", factor)])

    def start_phonation(self, volume: PhonationVolume) -> None:
        self.open_element("amazon:effect", [("phonation", str(volume))])

    def start_auto_breaths(
        self,
        volume: BreathVolume,
        frequency: AutoBreathFrequency,
        duration: BreathDuration,
    ) -> None:
        self.open_element("amazon:auto-breaths", [
            ("volume", str(volume)),
            ("frequency", str(frequency)),
            ("duration", str(duration)),
        ])

    def write_amazon_breath(self, volume: BreathVolume, duration: BreathDuration) -> None:
        self.empty_element("amazon:breath", [("volume", str(volume)), ("duration", str(duration))])

    def start_amazon_domain(self, name: AmazonDomainName) -> None:
        self.open_element("amazon:domain", [("name", str(name))])
