"""Decoders turning a resolved resource stream into the member's value."""

import codecs
from typing import BinaryIO

from lazy_resources.models import Decoder, ResolutionContext

DEFAULT_ENCODING = "utf-8-sig"


def read_utf8_stream(stream: BinaryIO) -> str:
    """Read a binary stream to the end and decode it as UTF-8.

    A leading byte-order mark is dropped. The stream is not closed; the
    caller owns it.
    """
    return stream.read().decode(DEFAULT_ENCODING)


def read_utf8(context: ResolutionContext) -> str:
    """Default decoder: the full UTF-8 text of the resolved resource."""
    return read_utf8_stream(context.stream)


def text_decoder(encoding: str, errors: str = "strict") -> Decoder:
    """Build a decoder reading the whole stream with the given text encoding.

    Args:
        encoding: Any codec name known to Python
        errors: Codec error handler (e.g. "strict", "replace")

    Returns:
        Decoder accepting a ResolutionContext

    Raises:
        LookupError: If the encoding is unknown
    """
    codec = codecs.lookup(encoding)

    def decode(context: ResolutionContext) -> str:
        return codec.decode(context.stream.read(), errors)[0]

    decode.__name__ = f"decode_{codec.name.replace('-', '_')}"
    return decode
