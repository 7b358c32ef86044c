# -*- coding: utf-8 -*-
"""
semodel-converter - Chunk stream writer / reader

- ChunkWriter serializes chunks described by ChunkTag into an in-memory buffer
- iter_chunks walks a decompressed buffer with the same table, used to verify
  XModel binary output (validators/structure_checker.py and tests)
"""

from __future__ import annotations
import io
from dataclasses import dataclass, field
from typing import BinaryIO, Iterator, Optional, Sequence, Tuple

from ..errors import ChunkError
from .chunk_schema import ChunkTag, string_padding


# =========================
# Writer
# =========================

@dataclass
class ChunkWriter:
    """
    Minimal tagged-chunk writer over a binary stream (little endian).

    Usage:
        cw = ChunkWriter()
        cw.write(ChunkTag.VERSION, 7)
        cw.write(ChunkTag.COMMENT, strings=["Exported via semodel-converter"])
        payload = cw.getvalue()
    """
    stream: BinaryIO = field(default_factory=io.BytesIO)
    chunk_count: int = 0

    def write(self, tag: ChunkTag, *values, strings: Sequence[str] = ()) -> None:
        if len(strings) != tag.string_count:
            raise ValueError(
                f"{tag.name} expects {tag.string_count} string(s), got {len(strings)}"
            )
        self.stream.write(tag.tag_struct.pack(tag.code))
        if tag.payload_struct.size:
            self.stream.write(tag.payload_struct.pack(*values))
        for s in strings:
            self.write_aligned_string(s)
        self.chunk_count += 1

    def write_aligned_string(self, s: str) -> None:
        """
        ASCII string, NUL terminated, zero padded so that (len + 1) rounds up to 4.
        Characters outside ASCII are written as '?'.
        """
        data = s.encode("ascii", errors="replace")
        self.stream.write(data)
        self.stream.write(b"\x00")
        self.stream.write(b"\x00" * string_padding(len(data)))

    def getvalue(self) -> bytes:
        return self.stream.getvalue()


# =========================
# Reader
# =========================

@dataclass
class Chunk:
    tag: ChunkTag
    values: Tuple
    strings: Tuple[str, ...]
    offset: int


def _read_aligned_string(data: bytes, pos: int) -> Tuple[str, int]:
    end = data.find(b"\x00", pos)
    if end < 0:
        raise ChunkError(f"Unterminated string at offset {pos}")
    length = end - pos
    text = data[pos:end].decode("ascii", errors="replace")
    return text, end + 1 + string_padding(length)


def iter_chunks(data: bytes, start: int = 0, end: Optional[int] = None) -> Iterator[Chunk]:
    """
    Decode chunks until `end` (default: end of buffer).

    Raises:
        ChunkError: unknown tag code or truncated payload
    """
    pos = start
    end = len(data) if end is None else end

    while pos < end:
        if pos + 2 > end:
            raise ChunkError(f"Truncated tag at offset {pos}")
        code = int.from_bytes(data[pos:pos + 2], "little")
        try:
            tag = ChunkTag.from_code(code)
        except KeyError:
            raise ChunkError(f"Unknown chunk tag 0x{code:04X} at offset {pos}") from None

        offset = pos
        pos += tag.tag_size
        size = tag.payload_struct.size
        if pos + size > end:
            raise ChunkError(f"Truncated {tag.name} payload at offset {offset}")
        values = tag.payload_struct.unpack_from(data, pos)
        pos += size

        strings = []
        for _ in range(tag.string_count):
            text, pos = _read_aligned_string(data, pos)
            strings.append(text)
        if pos > end:
            raise ChunkError(f"Truncated {tag.name} string at offset {offset}")

        yield Chunk(tag=tag, values=values, strings=tuple(strings), offset=offset)
