# -*- coding: utf-8 -*-
# File: core/utils.py
# Purpose: Shared helpers used by every writer
# Notes: unit conversion, vector normalization, global vertex offsets and
#        sparse weight lists live here so all writers agree on them.

"""
semodel-converter - Utils (centralized)

- Unit conversion (centimeters -> inches) for the inch based formats
- Vector normalization for formats that require unit normals
- Global vertex index: explicit fold over mesh vertex counts
- Sparse weight lists (zero influences dropped)
"""

from __future__ import annotations
import math
from itertools import accumulate
from typing import Iterator, List, Sequence, Tuple

from ..config.constants import CM_TO_INCH, NO_IMAGE
from .schema import BoneWeight, Material, Mesh, Model, Vertex


# =========================
# Units
# =========================

def cm_to_inch(value: float) -> float:
    """
    Centimeters -> inches.
    Used for every position/offset field of SMD and XModel output (OBJ keeps raw units).
    """
    return value * CM_TO_INCH


def cm_to_inch_vec3(vec3: Tuple[float, float, float]) -> Tuple[float, float, float]:
    return (cm_to_inch(vec3[0]), cm_to_inch(vec3[1]), cm_to_inch(vec3[2]))


# =========================
# Vectors
# =========================

def normalize_vector(vec3: Sequence[float]) -> Tuple[float, float, float]:
    """
    Divide a 3-vector by its Euclidean length.
    A zero-length vector is returned unchanged.
    """
    x, y, z = vec3
    length = math.sqrt(x * x + y * y + z * z)
    if length == 0.0:
        return (x, y, z)
    return (x / length, y / length, z / length)


# =========================
# Global vertex index
# =========================

def mesh_vertex_offsets(meshes: Sequence[Mesh], base: int = 0) -> List[int]:
    """
    Prefix sums of vertex counts: offsets[i] = base + sum(count of meshes[:i]).
    """
    counts = [mesh.vertex_count for mesh in meshes]
    return list(accumulate(counts[:-1], initial=base)) if counts else []


def iter_meshes_with_offset(model: Model, base: int = 0) -> Iterator[Tuple[int, Mesh, int]]:
    """
    Yield (mesh_index, mesh, global_offset) in mesh order.

    global index of a vertex = local index + global_offset. OBJ passes base=1
    because its indices are 1-based.
    """
    offsets = mesh_vertex_offsets(model.meshes, base)
    for mesh_index, (mesh, offset) in enumerate(zip(model.meshes, offsets)):
        yield mesh_index, mesh, offset


# =========================
# Weights
# =========================

def nonzero_weights(vertex: Vertex) -> List[BoneWeight]:
    """
    Weight list with zero influences removed, source order kept.
    Writers emit len() of this list as the weight count.
    """
    return [w for w in vertex.weights if w.weight != 0.0]


def material_of(model: Model, mesh: Mesh) -> Material:
    """
    The mesh's first material.
    Index validity is a precondition; a bad index raises IndexError
    (negative indices included, they must not wrap around).
    """
    index = mesh.material_indices[0]
    if index < 0:
        raise IndexError(f"material index {index} out of range")
    return model.materials[index]


def diffuse_map_of(material: Material) -> str:
    """Diffuse image name written in XModel material records"""
    if material.data is None:
        return NO_IMAGE
    return material.data.diffuse_map


# =========================
# Module exports
# =========================

__all__ = [
    "CM_TO_INCH",
    "cm_to_inch",
    "cm_to_inch_vec3",
    "normalize_vector",
    "mesh_vertex_offsets",
    "iter_meshes_with_offset",
    "nonzero_weights",
    "material_of",
    "diffuse_map_of",
]
