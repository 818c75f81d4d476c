"""Content-Encoding decoders.

``select_decoder`` maps the literal ``Content-Encoding`` header value onto a
decompressing view over the raw body chunks.  The header is trusted
verbatim: there is no content sniffing, and unknown values pass the body
through untouched.

Only the gzip decoder validates anything at construction time (the member
header).  Corrupt or truncated data in any decoder surfaces later, while
the decoded stream is being read.
"""

from __future__ import annotations

import zlib
from enum import Enum
from typing import Iterable, Iterator, assert_never

import brotli

from siteinfo.pipeline.errors import DecodeError

_GZIP_MAGIC = b"\x1f\x8b"
_GZIP_HEADER_LEN = 10
_GZIP_METHOD_DEFLATE = 8


class ContentEncoding(str, Enum):
    GZIP = "gzip"
    DEFLATE = "deflate"
    BR = "br"
    IDENTITY = ""

    @classmethod
    def from_header(cls, value: str | None) -> ContentEncoding:
        """Return the member for an exact header value, ``IDENTITY`` otherwise."""
        for member in (cls.GZIP, cls.DEFLATE, cls.BR):
            if value == member.value:
                return member
        return cls.IDENTITY


class _ZlibDecoder:
    """Iterate decompressed chunks from a zlib-family stream.

    With *multi_member* (gzip), data after the end of one member starts the
    next one.  Otherwise decoding stops at the final block and any trailing
    bytes are ignored.
    """

    def __init__(
        self,
        chunks: Iterator[bytes],
        wbits: int,
        pending: bytes = b"",
        multi_member: bool = False,
    ) -> None:
        self._chunks = chunks
        self._wbits = wbits
        self._pending = pending
        self._multi_member = multi_member

    def __iter__(self) -> Iterator[bytes]:
        decompressor = zlib.decompressobj(self._wbits)
        try:
            for chunk in self._iter_input():
                while chunk:
                    data = decompressor.decompress(chunk)
                    if data:
                        yield data
                    if self._multi_member and decompressor.eof and decompressor.unused_data:
                        # Next gzip member (or trailing garbage, which zlib rejects).
                        chunk = decompressor.unused_data
                        decompressor = zlib.decompressobj(self._wbits)
                    else:
                        chunk = b""
                if decompressor.eof and not self._multi_member:
                    break
            tail = decompressor.flush()
            if tail:
                yield tail
        except zlib.error as exc:
            raise DecodeError(f"{self._name}: {exc}") from exc
        if not decompressor.eof:
            raise DecodeError(f"{self._name}: unexpected end of stream")

    @property
    def _name(self) -> str:
        return "gzip" if self._wbits > zlib.MAX_WBITS else "deflate"

    def _iter_input(self) -> Iterator[bytes]:
        if self._pending:
            yield self._pending
        yield from self._chunks


def _gzip_decoder(body: Iterable[bytes]) -> _ZlibDecoder:
    """Read and check the gzip member header before handing back a decoder.

    Raises:
        DecodeError: the body is too short or does not start with a gzip
            header using the deflate method.
    """
    chunks = iter(body)
    head = b""
    while len(head) < _GZIP_HEADER_LEN:
        chunk = next(chunks, None)
        if chunk is None:
            raise DecodeError("gzip: unexpected end of header")
        head += chunk
    if head[:2] != _GZIP_MAGIC:
        raise DecodeError("gzip: invalid header")
    if head[2] != _GZIP_METHOD_DEFLATE:
        raise DecodeError(f"gzip: unsupported compression method {head[2]}")
    return _ZlibDecoder(chunks, 16 + zlib.MAX_WBITS, pending=head, multi_member=True)


def _deflate_decoder(body: Iterable[bytes]) -> _ZlibDecoder:
    # Raw deflate (no zlib wrapper); bytes after the final block are ignored.
    return _ZlibDecoder(iter(body), -zlib.MAX_WBITS)


def _brotli_decoder(body: Iterable[bytes]) -> Iterator[bytes]:
    decompressor = brotli.Decompressor()
    try:
        for chunk in body:
            data = decompressor.process(chunk)
            if data:
                yield data
    except brotli.error as exc:
        raise DecodeError(f"br: {exc}") from exc
    if not decompressor.is_finished():
        raise DecodeError("br: unexpected end of stream")


def select_decoder(content_encoding: str | None, body: Iterable[bytes]) -> Iterable[bytes]:
    """Return a decoded view over *body* for the given ``Content-Encoding``.

    Any value other than ``gzip``, ``deflate`` or ``br`` (including empty)
    returns *body* itself.

    Raises:
        DecodeError: a gzip body without a valid member header.
    """
    encoding = ContentEncoding.from_header(content_encoding)
    if encoding is ContentEncoding.GZIP:
        return _gzip_decoder(body)
    if encoding is ContentEncoding.DEFLATE:
        return _deflate_decoder(body)
    if encoding is ContentEncoding.BR:
        return _brotli_decoder(body)
    if encoding is ContentEncoding.IDENTITY:
        return body
    assert_never(encoding)
