"""Tag names and attribute values understood by the converter.

Every closed value set is an Enum whose value is the spelling written to the
SSML output. `parse` accepts any casing of that spelling, plus a few extra
input spellings listed in `_EXTRA_SPELLINGS`. Values follow the Amazon Polly
supported SSML tags:
http://docs.aws.amazon.com/polly/latest/dg/supported-ssml.html
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Type, TypeVar
import re

V = TypeVar("V", bound="SSMLValue")


class SSMLValue(Enum):
    """Closed set of values with one canonical output spelling each."""

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls: Type[V], raw: str) -> Optional[V]:
        key = raw.lower()
        alias = _EXTRA_SPELLINGS.get(cls.__name__, {}).get(key)
        if alias is not None:
            key = alias
        for member in cls:
            if member.value.lower() == key:
                return member
        return None


class OpenTag(SSMLValue):
    BREAK = "break"
    LANG = "lang"
    MARK = "mark"
    PARAGRAPH = "p"
    PHONEME = "phoneme"
    PROSODY = "prosody"
    SENTENCE = "s"
    SAY_AS = "say-as"
    SUB = "sub"
    WORD = "w"
    AMAZON_EFFECT = "amazon:effect"
    AMAZON_AUTO_BREATHS = "amazon:auto-breaths"
    AMAZON_BREATH = "amazon:breath"
    AMAZON_DOMAIN = "amazon:domain"


# break and amazon:breath are self-closing and have no close kind.
class CloseTag(SSMLValue):
    LANG = "lang"
    MARK = "mark"
    PARAGRAPH = "p"
    PHONEME = "phoneme"
    PROSODY = "prosody"
    SENTENCE = "s"
    SAY_AS = "say-as"
    SUB = "sub"
    WORD = "w"
    AMAZON_EFFECT = "amazon:effect"
    AMAZON_AUTO_BREATHS = "amazon:auto-breaths"
    AMAZON_DOMAIN = "amazon:domain"


class BreakStrength(SSMLValue):
    NONE = "none"
    X_WEAK = "x-weak"
    WEAK = "weak"
    MEDIUM = "medium"
    STRONG = "strong"
    X_STRONG = "x-strong"


class PhonemeAlphabet(SSMLValue):
    IPA = "ipa"
    X_SAMPA = "x-sampa"


class ProsodyRate(SSMLValue):
    X_SLOW = "x-slow"
    SLOW = "slow"
    MEDIUM = "medium"
    FAST = "fast"
    X_FAST = "x-fast"


class WordRole(SSMLValue):
    VERB = "amazon:VB"
    PAST_TENSE = "amazon:VBD"
    PRESENT_TENSE = "amazon:SENSE_1"


class AmazonEffect(SSMLValue):
    WHISPERED = "whispered"
    DRC = "drc"


class AmazonDomainName(SSMLValue):
    NEWS = "news"


class BreathVolume(SSMLValue):
    DEFAULT = "default"
    X_SOFT = "x-soft"
    SOFT = "soft"
    MEDIUM = "medium"
    LOUD = "loud"
    X_LOUD = "x-loud"


class BreathDuration(SSMLValue):
    DEFAULT = "default"
    X_SHORT = "x-short"
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"
    X_LONG = "x-long"


class AutoBreathFrequency(SSMLValue):
    DEFAULT = "default"
    X_LOW = "x-low"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    X_HIGH = "x-high"


class PhonationVolume(SSMLValue):
    SOFT = "soft"


# Lowercased input spelling -> canonical value, per enum class name.
_EXTRA_SPELLINGS: Dict[str, Dict[str, str]] = {
    # Polly's own spelling `none` is accepted too, so `strength=none` writes
    # strength="none" where older converters wrote a bare <break/>.
    "BreakStrength": {"break": "none"},
    "AmazonEffect": {"whisper": "whispered"},
    # Breath attributes left out of a tag fall back to the service default.
    "BreathVolume": {"": "default"},
    "BreathDuration": {"": "default"},
    "AutoBreathFrequency": {"": "default"},
}

_U32_MAX = 2 ** 32 - 1
_UNSIGNED = re.compile(r"\+?[0-9]+")


@dataclass(frozen=True)
class BreakTime:
    """Length of a pause, in whole seconds or milliseconds."""

    time: int
    is_seconds: bool

    def __str__(self) -> str:
        return f"{self.time}{'s' if self.is_seconds else 'ms'}"

    @classmethod
    def parse(cls, raw: str) -> Optional["BreakTime"]:
        if raw.endswith("ms") and raw != "ms":
            number, is_seconds = raw[:-2], False
        elif raw.endswith("s") and raw != "s":
            number, is_seconds = raw[:-1], True
        else:
            return None

        if not _UNSIGNED.fullmatch(number):
            return None
        value = int(number)
        if value > _U32_MAX:
            return None
        return cls(value, is_seconds)


def resolve_open_tag(name: str) -> Optional[OpenTag]:
    return OpenTag.parse(name)


def resolve_close_tag(name: str) -> Optional[CloseTag]:
    return CloseTag.parse(name)
