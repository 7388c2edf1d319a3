"""Turns `${tag}` annotated text into Amazon Polly SSML.

The error policy is deliberately loose. If the author doesn't close a tag we
don't close it; if they close a tag they never opened we still write the
close; nested paragraphs are written as typed. Unknown tags, unknown values
and missing required attributes drop just that tag. All of these can give
SSML Polly rejects, but none of them raise. The only failure is a `${` that
never gets its `}`.
"""
from typing import Callable, Dict, Optional
import logging

from polly_ssml.errors import XmlWriterError
from polly_ssml.ssml_constants import (
    AmazonDomainName,
    AmazonEffect,
    AutoBreathFrequency,
    BreakStrength,
    BreakTime,
    BreathDuration,
    BreathVolume,
    OpenTag,
    PhonationVolume,
    PhonemeAlphabet,
    ProsodyRate,
    WordRole,
    resolve_close_tag,
    resolve_open_tag,
)
from polly_ssml.tokenizer import EndTag, StartTag, Text, tokenize
from polly_ssml.xml_writer import SSMLWriter

logger = logging.getLogger(__name__)

ESCAPED_OPENER = "$\\{"
OPENER = "${"

Params = Dict[str, str]


class SSMLTextParser:
    """Interprets tokens and writes the matching SSML elements."""

    def __init__(self):
        self._open_handlers: Dict[OpenTag, Callable[[SSMLWriter, Params], None]] = {
            OpenTag.BREAK: self._start_break,
            OpenTag.LANG: self._start_lang,
            OpenTag.MARK: self._start_mark,
            OpenTag.PARAGRAPH: self._start_paragraph,
            OpenTag.PHONEME: self._start_phoneme,
            OpenTag.PROSODY: self._start_prosody,
            OpenTag.SENTENCE: self._start_sentence,
            OpenTag.SAY_AS: self._start_say_as,
            OpenTag.SUB: self._start_sub,
            OpenTag.WORD: self._start_word,
            OpenTag.AMAZON_EFFECT: self._start_amazon_effect,
            OpenTag.AMAZON_AUTO_BREATHS: self._start_auto_breaths,
            OpenTag.AMAZON_BREATH: self._write_breath,
            OpenTag.AMAZON_DOMAIN: self._start_amazon_domain,
        }

    def parse(self, text: str, lang: Optional[str] = None,
              onlangfailure: Optional[str] = None) -> str:
        """Convert `text` into a complete SSML document.

        Raises MalformedTagError if a tag is never terminated.
        """
        writer = SSMLWriter()
        writer.start_speak(lang, onlangfailure)

        for item in tokenize(text):
            try:
                if isinstance(item, StartTag):
                    self._handle_start(writer, item)
                elif isinstance(item, EndTag):
                    self._handle_end(writer, item)
                elif isinstance(item, Text):
                    writer.write_text(item.content.replace(ESCAPED_OPENER, OPENER))
            except XmlWriterError as e:
                logger.debug("Skipping %r: %s", item, e)

        writer.end_speak()
        return writer.render()

    def _handle_start(self, writer: SSMLWriter, tag: StartTag) -> None:
        kind = resolve_open_tag(tag.name)
        if kind is None:
            logger.debug("Ignoring unknown tag %r", tag.name)
            return
        self._open_handlers[kind](writer, tag.params)

    def _handle_end(self, writer: SSMLWriter, tag: EndTag) -> None:
        kind = resolve_close_tag(tag.name)
        if kind is None:
            logger.debug("Ignoring unknown end tag %r", tag.name)
            return
        writer.close_element(str(kind))

    # Attribute keys are matched exactly as typed; only tag names and
    # enumerated values ignore case.

    def _start_break(self, writer: SSMLWriter, params: Params) -> None:
        strength = BreakStrength.parse(params["strength"]) if "strength" in params else None
        time = BreakTime.parse(params["time"]) if "time" in params else None
        writer.ssml_break(strength, time)

    def _start_lang(self, writer: SSMLWriter, params: Params) -> None:
        if "lang" not in params:
            return
        writer.start_lang(params["lang"], params.get("onlangfailure"))

    def _start_mark(self, writer: SSMLWriter, params: Params) -> None:
        if "name" not in params:
            return
        writer.start_mark(params["name"])

    def _start_paragraph(self, writer: SSMLWriter, params: Params) -> None:
        writer.start_paragraph()

    def _start_sentence(self, writer: SSMLWriter, params: Params) -> None:
        writer.start_sentence()

    def _start_phoneme(self, writer: SSMLWriter, params: Params) -> None:
        if "alphabet" not in params or "ph" not in params:
            return
        alphabet = PhonemeAlphabet.parse(params["alphabet"])
        if alphabet is None:
            return
        writer.start_phoneme(alphabet, params["ph"])

    def _start_prosody(self, writer: SSMLWriter, params: Params) -> None:
        rate = ProsodyRate.parse(params["rate"]) if "rate" in params else None
        writer.start_prosody(params.get("volume"), rate, params.get("pitch"))

    def _start_say_as(self, writer: SSMLWriter, params: Params) -> None:
        if "interpret-as" not in params:
            return
        writer.start_say_as(params["interpret-as"])

    def _start_sub(self, writer: SSMLWriter, params: Params) -> None:
        if "alias" not in params:
            return
        writer.start_sub(params["alias"])

    def _start_word(self, writer: SSMLWriter, params: Params) -> None:
        if "role" not in params:
            return
        role = WordRole.parse(params["role"])
        if role is not None:
            writer.start_word(role)

    def _start_amazon_effect(self, writer: SSMLWriter, params: Params) -> None:
        # One effect per tag: name wins over vocal-tract-length, which wins
        # over phonation. An invalid value for the winner drops the tag.
        if "name" in params:
            effect = AmazonEffect.parse(params["name"])
            if effect is not None:
                writer.start_amazon_effect(effect)
        elif "vocal-tract-length" in params:
            writer.start_vocal_tract_length(params["vocal-tract-length"])
        elif "phonation" in params:
            phonation = PhonationVolume.parse(params["phonation"])
            if phonation is not None:
                writer.start_phonation(phonation)

    def _start_auto_breaths(self, writer: SSMLWriter, params: Params) -> None:
        volume = BreathVolume.parse(params.get("volume", ""))
        frequency = AutoBreathFrequency.parse(params.get("frequency", ""))
        duration = BreathDuration.parse(params.get("duration", ""))
        if volume is None or frequency is None or duration is None:
            return
        writer.start_auto_breaths(volume, frequency, duration)

    def _write_breath(self, writer: SSMLWriter, params: Params) -> None:
        volume = BreathVolume.parse(params.get("volume", ""))
        duration = BreathDuration.parse(params.get("duration", ""))
        if volume is None or duration is None:
            return
        writer.write_amazon_breath(volume, duration)

    def _start_amazon_domain(self, writer: SSMLWriter, params: Params) -> None:
        name = AmazonDomainName.parse(params.get("name", ""))
        if name is not None:
            writer.start_amazon_domain(name)


def convert(text: str, lang: Optional[str] = None, onlangfailure: Optional[str] = None) -> str:
    """Convert `${tag}` annotated text into an SSML document string."""
    return SSMLTextParser().parse(text, lang, onlangfailure)


def parse_as_ssml(text: str) -> str:
    """Shorthand for `convert` with the default <speak> attributes."""
    return convert(text)
