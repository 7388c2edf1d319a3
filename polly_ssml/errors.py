"""Exceptions raised by the text-to-SSML converter."""


class ConversionError(Exception):
    """Base exception for conversion failures."""


class MalformedTagError(ConversionError):
    """A `${` marker was opened but never closed with `}`."""

    def __init__(self, remainder: str):
        self.remainder = remainder
        preview = remainder if len(remainder) <= 40 else remainder[:40] + "..."
        super().__init__(f"Unterminated tag starting at: {preview!r}")


class XmlWriterError(ConversionError):
    """The writer was asked for an element it cannot produce."""
