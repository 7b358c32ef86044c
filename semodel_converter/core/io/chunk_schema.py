# -*- coding: utf-8 -*-
"""
semodel-converter - XModel binary chunk table

- Every chunk is <tag><payload>[<aligned string>*]
- Tags are little-endian, either u16 or u32 wide (all codes fit in 16 bits, a
  u32 tag carries two zero bytes after the code)
- The payload is a fixed struct; strings follow it, ASCII + NUL + zero padding
  so that (len + 1) is a multiple of 4
- This table is the single definition used by ChunkWriter and iter_chunks
"""

from __future__ import annotations
import struct
from enum import Enum
from typing import Dict


class ChunkTag(Enum):
    # name                      = (code,   tag bytes, payload, strings)
    COMMENT                     = (0xC355, 4, "",     1)
    MODEL                       = (0x46C8, 4, "",     0)
    VERSION                     = (0x24D1, 2, "h",    0)

    # Skeleton
    BONE_COUNT                  = (0x76BA, 2, "h",    0)
    BONE_INFO                   = (0xF099, 4, "ii",   1)   # index, parent, name
    BONE_INDEX                  = (0xDD9A, 2, "h",    0)
    OFFSET                      = (0x9383, 4, "fff",  0)   # inches
    BONE_MATRIX_X               = (0xDCFD, 2, "hhh",  0)
    BONE_MATRIX_Y               = (0xCCDC, 2, "hhh",  0)
    BONE_MATRIX_Z               = (0xFCBF, 2, "hhh",  0)

    # Vertices
    VERTEX_COUNT                = (0x2AEC, 4, "I",    0)
    VERTEX_INDEX                = (0xB097, 4, "I",    0)
    WEIGHT_COUNT                = (0xEA46, 2, "h",    0)
    WEIGHT                      = (0xF1AB, 2, "hf",   0)   # bone index, influence

    # Faces
    FACE_COUNT                  = (0xBE92, 4, "I",    0)
    FACE_INFO                   = (0x6711, 2, "hhh",  0)   # 0, mesh index, material index
    NORMAL                      = (0x89EC, 2, "hhh",  0)   # int16 packed
    COLOR                       = (0x6DD8, 4, "BBBB", 0)   # RGBA bytes
    UV                          = (0x1AD4, 2, "Hff",  0)   # layer, u, v

    # Objects
    OBJECT_COUNT                = (0x62AF, 2, "h",    0)
    OBJECT_INFO                 = (0x87D4, 2, "H",    1)   # index, name

    # Materials
    MATERIAL_COUNT              = (0xA1B2, 2, "h",    0)
    MATERIAL_INFO               = (0xA700, 2, "H",    3)   # index, name, type, image
    MATERIAL_TRANSPARENCY       = (0x6DAB, 4, "ffff", 0)
    MATERIAL_AMBIENT_COLOR      = (0x37FF, 4, "ffff", 0)
    MATERIAL_INCANDESCENCE      = (0x4265, 4, "ffff", 0)
    MATERIAL_COEFFS             = (0xC835, 4, "ff",   0)
    MATERIAL_GLOW               = (0xFE0C, 4, "ff",   0)
    MATERIAL_REFRACTIVE         = (0x7E24, 4, "ff",   0)
    MATERIAL_SPECULAR_COLOR     = (0x317C, 4, "ffff", 0)
    MATERIAL_REFLECTIVE_COLOR   = (0xE593, 4, "ffff", 0)
    MATERIAL_REFLECTIVE         = (0x7D76, 4, "ff",   0)
    MATERIAL_BLINN              = (0x83C7, 4, "ff",   0)
    MATERIAL_PHONG              = (0x5CD2, 4, "f",    0)

    def __init__(self, code: int, tag_size: int, payload: str, string_count: int):
        self.code = code
        self.tag_size = tag_size
        self.tag_struct = struct.Struct("<H" if tag_size == 2 else "<I")
        self.payload_struct = struct.Struct("<" + payload)
        self.string_count = string_count

    @classmethod
    def from_code(cls, code: int) -> "ChunkTag":
        """Look up a tag by its numeric code; KeyError if unknown"""
        return _BY_CODE[code]


_BY_CODE: Dict[int, ChunkTag] = {tag.code: tag for tag in ChunkTag}


def aligned_string_size(length: int) -> int:
    """
    Size of an aligned string of `length` ASCII characters, NUL included
    """
    return (length + 1 + 3) & ~3


def string_padding(length: int) -> int:
    """
    Zero bytes written after the NUL terminator
    """
    return aligned_string_size(length) - (length + 1)


__all__ = [
    "ChunkTag",
    "aligned_string_size",
    "string_padding",
]
