"""Unit tests for resource decoders."""

import io

import pytest

from lazy_resources.models import MemberDescriptor, ResolutionContext
from lazy_resources.resources import read_utf8, read_utf8_stream, text_decoder


def make_context(data: bytes) -> ResolutionContext:
    return ResolutionContext(
        name="A.Sample.txt",
        member=MemberDescriptor("Sample"),
        stream=io.BytesIO(data),
    )


class TestReadUtf8:
    """Tests for the default UTF-8 decoder."""

    def test_reads_whole_stream(self):
        """The entire stream is decoded."""
        context = make_context("héllo\nwörld".encode("utf-8"))

        assert read_utf8(context) == "héllo\nwörld"
        assert context.stream.read() == b""

    def test_strips_byte_order_mark(self):
        """A UTF-8 byte-order mark is not part of the value."""
        context = make_context(b"\xef\xbb\xbfThis is a sample resource")

        assert read_utf8(context) == "This is a sample resource"

    def test_empty_stream(self):
        """An empty resource decodes to an empty string."""
        assert read_utf8(make_context(b"")) == ""

    def test_invalid_utf8_raises(self):
        """Undecodable bytes raise instead of being replaced."""
        with pytest.raises(UnicodeDecodeError):
            read_utf8(make_context(b"\xff\xfe\xfa"))

    def test_stream_helper_leaves_stream_open(self):
        """read_utf8_stream does not close the caller's stream."""
        stream = io.BytesIO(b"data")

        assert read_utf8_stream(stream) == "data"
        assert not stream.closed


class TestTextDecoder:
    """Tests for text_decoder factory."""

    def test_latin1(self):
        """Decoders can use any codec."""
        decoder = text_decoder("latin-1")

        assert decoder(make_context("café".encode("latin-1"))) == "café"

    def test_error_handler(self):
        """The error handler is passed to the codec."""
        decoder = text_decoder("ascii", errors="replace")

        assert decoder(make_context(b"caf\xe9")) == "caf�"

    def test_unknown_encoding(self):
        """Unknown codecs are rejected when the decoder is built."""
        with pytest.raises(LookupError):
            text_decoder("not-a-codec")

    def test_decoder_name(self):
        """The decoder is named after the normalized codec."""
        assert text_decoder("UTF-16").__name__ == "decode_utf_16"
