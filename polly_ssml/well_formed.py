"""Reports whether converted SSML is well-formed XML.

Conversion never balances tags, so a missing `${/p}` or a stray `${/s}` gives
a document an XML parser will reject. This check only tells the author about
it; it does not validate against the SSML schema.
"""
from typing import Optional
from xml.sax import SAXParseException
from xml.sax.handler import ContentHandler

from defusedxml import DefusedXmlException
from defusedxml import sax as safe_sax


def check_well_formed(ssml: str) -> Optional[str]:
    """Return None if `ssml` parses, else a one-line description of the problem."""
    try:
        # Namespace processing stays off, so `amazon:` names need no declaration.
        safe_sax.parseString(ssml.encode("utf-8"), ContentHandler())
    except SAXParseException as e:
        return f"line {e.getLineNumber()}, column {e.getColumnNumber()}: {e.getMessage()}"
    except DefusedXmlException as e:
        return str(e)
    return None
