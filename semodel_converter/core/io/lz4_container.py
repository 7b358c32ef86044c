# File: core/io/lz4_container.py
# Purpose: XModel binary container (LZ4 high-compression block)
# Notes:
# - Layout: <magic "*LZ4*" (5 bytes)><uncompressed size u32 LE><LZ4 block>
# - The block carries no size prefix of its own
# - Reading must recover exactly the stored size before any chunk parsing

import struct

import lz4.block

from ...config.constants import XMODEL_BIN_MAGIC
from ..errors import ContainerError

HEADER_SIZE = len(XMODEL_BIN_MAGIC) + 4


def write_container(payload: bytes) -> bytes:
    """
    Compress a chunk stream into the container layout

    Args:
        payload: complete uncompressed chunk stream

    Returns:
        container bytes ready to be written to disk
    """
    compressed = lz4.block.compress(payload, mode="high_compression", store_size=False)
    return XMODEL_BIN_MAGIC + struct.pack("<I", len(payload)) + compressed


def read_container(data: bytes) -> bytes:
    """
    Decompress container bytes back to the chunk stream

    Raises:
        ContainerError: bad magic, truncated header, or a decompressed size
        different from the stored one
    """
    if len(data) < HEADER_SIZE:
        raise ContainerError(f"Container too small: {len(data)} bytes")
    if data[:len(XMODEL_BIN_MAGIC)] != XMODEL_BIN_MAGIC:
        raise ContainerError(f"Bad container magic: {data[:len(XMODEL_BIN_MAGIC)]!r}")

    size = struct.unpack_from("<I", data, len(XMODEL_BIN_MAGIC))[0]
    try:
        payload = lz4.block.decompress(data[HEADER_SIZE:], uncompressed_size=size)
    except lz4.block.LZ4BlockError as e:
        raise ContainerError(f"LZ4 decompression failed: {e}") from e

    if len(payload) != size:
        raise ContainerError(f"Decompressed {len(payload)} bytes, header says {size}")
    return payload
