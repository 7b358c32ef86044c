# File: core/io/semodel_reader.py
# Purpose: Decode .semodel files into core.schema.Model
# Notes:
# - Layout (little endian):
#   header: magic "SEModel"(7) version(u16) header_size(u16)
#           data_flags(u8) bone_flags(u8) mesh_flags(u8)
#           bone_count(u32) mesh_count(u32) material_count(u32) reserved(3)
#   bone names: NUL terminated strings
#   bones: flags(u8) parent(i32) [global pos(3f) rot(4f)] [local pos(3f) rot(4f)] [scale(3f)]
#   meshes: flags(u8) layer_count(u8) influences(u8) vertex_count(u32) face_count(u32)
#           positions, [uv layers], [normals], [colors], [weights], faces, material indices(i32 x layers)
#   materials: name, is_simple(u8) [diffuse, normal, specular]
# - Weight bone indices are u8/u16/u32 depending on bone count; face indices
#   likewise depending on the mesh's vertex count
# - Padding influences (weight 0.0) are kept; writers drop them on output

import struct
from pathlib import Path
from typing import List, Tuple, Union

from ..errors import ModelParseError
from ..schema import (
    Bone, BoneWeight, Face, Material, Mesh, Model, SimpleMaterial, Vertex,
)

SEMODEL_MAGIC = b"SEModel"

# Data presence flags
SEMODEL_PRESENCE_BONES = 1 << 0
SEMODEL_PRESENCE_MESHES = 1 << 1
SEMODEL_PRESENCE_MATERIALS = 1 << 2

# Bone data presence flags
SEMODEL_BONE_GLOBAL_MATRIX = 1 << 0
SEMODEL_BONE_LOCAL_MATRIX = 1 << 1
SEMODEL_BONE_SCALES = 1 << 2

# Mesh data presence flags
SEMODEL_MESH_UVSET = 1 << 0
SEMODEL_MESH_NORMALS = 1 << 1
SEMODEL_MESH_COLOR = 1 << 2
SEMODEL_MESH_WEIGHTS = 1 << 3


class _Cursor:
    """Bounds-checked little endian reader over a bytes object"""

    def __init__(self, data: bytes):
        self.data = data
        self.pos = 0

    def unpack(self, fmt: str) -> Tuple:
        size = struct.calcsize(fmt)
        if self.pos + size > len(self.data):
            raise ModelParseError(
                f"Unexpected end of file at offset {self.pos} (need {size} bytes)"
            )
        values = struct.unpack_from(fmt, self.data, self.pos)
        self.pos += size
        return values

    def read(self, size: int) -> bytes:
        if self.pos + size > len(self.data):
            raise ModelParseError(f"Unexpected end of file at offset {self.pos}")
        chunk = self.data[self.pos:self.pos + size]
        self.pos += size
        return chunk

    def cstring(self) -> str:
        end = self.data.find(b"\x00", self.pos)
        if end < 0:
            raise ModelParseError(f"Unterminated string at offset {self.pos}")
        text = self.data[self.pos:end].decode("utf-8", errors="replace")
        self.pos = end + 1
        return text


def _index_format(count: int) -> str:
    if count <= 0xFF:
        return "<B"
    if count <= 0xFFFF:
        return "<H"
    return "<I"


def _read_bones(cur: _Cursor, bone_count: int, bone_flags: int) -> List[Bone]:
    names = [cur.cstring() for _ in range(bone_count)]
    bones: List[Bone] = []

    for name in names:
        _flags, parent = cur.unpack("<Bi")
        bone = Bone(name=name, parent=parent)

        if bone_flags & SEMODEL_BONE_GLOBAL_MATRIX:
            bone.global_position = cur.unpack("<3f")
            bone.global_rotation = cur.unpack("<4f")
        if bone_flags & SEMODEL_BONE_LOCAL_MATRIX:
            bone.local_position = cur.unpack("<3f")
            bone.local_rotation = cur.unpack("<4f")
        if bone_flags & SEMODEL_BONE_SCALES:
            bone.scale = cur.unpack("<3f")

        bones.append(bone)
    return bones


def _read_mesh(cur: _Cursor, mesh_flags: int, bone_count: int) -> Mesh:
    _flags, layer_count, influence_count, vertex_count, face_count = cur.unpack("<BBBII")

    vertices = [Vertex(position=cur.unpack("<3f")) for _ in range(vertex_count)]

    if mesh_flags & SEMODEL_MESH_UVSET:
        for vertex in vertices:
            vertex.uv_sets = [cur.unpack("<2f") for _ in range(layer_count)]

    if mesh_flags & SEMODEL_MESH_NORMALS:
        for vertex in vertices:
            vertex.normal = cur.unpack("<3f")

    if mesh_flags & SEMODEL_MESH_COLOR:
        for vertex in vertices:
            vertex.color = cur.unpack("<4B")

    if mesh_flags & SEMODEL_MESH_WEIGHTS:
        bone_fmt = _index_format(bone_count)
        for vertex in vertices:
            weights = []
            for _ in range(influence_count):
                (bone_index,) = cur.unpack(bone_fmt)
                (weight,) = cur.unpack("<f")
                weights.append(BoneWeight(bone_index, weight))
            vertex.weights = weights

    face_fmt = "<3" + _index_format(vertex_count)[1]
    faces = [Face(*cur.unpack(face_fmt)) for _ in range(face_count)]

    material_indices = list(cur.unpack(f"<{layer_count}i")) if layer_count else []

    return Mesh(vertices=vertices, faces=faces, material_indices=material_indices)


def _read_material(cur: _Cursor) -> Material:
    name = cur.cstring()
    (is_simple,) = cur.unpack("<B")
    if not is_simple:
        return Material(name=name)
    return Material(
        name=name,
        data=SimpleMaterial(
            diffuse_map=cur.cstring(),
            normal_map=cur.cstring(),
            specular_map=cur.cstring(),
        ),
    )


def parse_semodel(data: bytes) -> Model:
    """
    Decode SEModel bytes

    Raises:
        ModelParseError: bad magic or truncated data
    """
    cur = _Cursor(data)

    magic = cur.read(len(SEMODEL_MAGIC))
    if magic != SEMODEL_MAGIC:
        raise ModelParseError(f"Not a SEModel file (magic: {magic!r})")

    _version, _header_size = cur.unpack("<HH")
    data_flags, bone_flags, mesh_flags = cur.unpack("<BBB")
    bone_count, mesh_count, material_count = cur.unpack("<III")
    cur.read(3)  # reserved

    model = Model()

    if data_flags & SEMODEL_PRESENCE_BONES:
        model.bones = _read_bones(cur, bone_count, bone_flags)
    if data_flags & SEMODEL_PRESENCE_MESHES:
        model.meshes = [_read_mesh(cur, mesh_flags, bone_count) for _ in range(mesh_count)]
    if data_flags & SEMODEL_PRESENCE_MATERIALS:
        model.materials = [_read_material(cur) for _ in range(material_count)]

    return model


def read_semodel(path: Union[str, Path]) -> Model:
    """Read and decode a .semodel file"""
    return parse_semodel(Path(path).read_bytes())


def read_bone_count(path: Union[str, Path]) -> int:
    """
    Bone count from the header only (offset 14), without decoding the model.
    Used to list models cheaply.
    """
    with open(path, "rb") as f:
        header = f.read(18)
    if len(header) < 18 or header[:len(SEMODEL_MAGIC)] != SEMODEL_MAGIC:
        raise ModelParseError(f"Not a SEModel file: {path}")
    return struct.unpack_from("<I", header, 14)[0]
