# -*- coding: utf-8 -*-
"""
File IO: text buffer, chunk stream, LZ4 container, SEModel reader
"""

from .chunk_schema import ChunkTag
from .chunk_writer import Chunk, ChunkWriter, iter_chunks
from .lz4_container import read_container, write_container
from .semodel_reader import parse_semodel, read_semodel
from .text_writer import TextWriter, format_fixed, format_general

__all__ = [
    'ChunkTag',
    'Chunk',
    'ChunkWriter',
    'iter_chunks',
    'read_container',
    'write_container',
    'parse_semodel',
    'read_semodel',
    'TextWriter',
    'format_fixed',
    'format_general',
]
