# File: core/schema.py
# Purpose: In-memory model structures consumed by every writer (dataclass)
# Notes:
# - Filled by the SEModel reader (core/io/semodel_reader.py) or any other model source
# - Read-only for writers: no writer mutates a model it is given
# - Vectors are plain tuples; quaternions are (x, y, z, w)

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


Vector2 = Tuple[float, float]
Vector3 = Tuple[float, float, float]
Quaternion = Tuple[float, float, float, float]  # (x, y, z, w)
Color = Tuple[int, int, int, int]               # RGBA, 0..255

IDENTITY_QUATERNION: Quaternion = (0.0, 0.0, 0.0, 1.0)


# ==================== Skeleton ====================

@dataclass
class Bone:
    """Skeleton node with parent-relative (local) and absolute (global) transforms"""
    name: str
    parent: int = -1                                    # -1 = root
    local_position: Vector3 = (0.0, 0.0, 0.0)
    local_rotation: Quaternion = IDENTITY_QUATERNION
    global_position: Vector3 = (0.0, 0.0, 0.0)
    global_rotation: Quaternion = IDENTITY_QUATERNION
    scale: Vector3 = (1.0, 1.0, 1.0)


# ==================== Geometry ====================

@dataclass
class BoneWeight:
    """One (bone index, influence) pair of a vertex"""
    bone_index: int
    weight: float


@dataclass
class Vertex:
    """Mesh vertex; the normal is not guaranteed to be unit length"""
    position: Vector3 = (0.0, 0.0, 0.0)
    normal: Vector3 = (0.0, 0.0, 0.0)
    color: Color = (255, 255, 255, 255)
    uv_sets: List[Vector2] = field(default_factory=list)
    weights: List[BoneWeight] = field(default_factory=list)


@dataclass
class Face:
    """Triangle; indices are local to the parent mesh, in source order"""
    index1: int
    index2: int
    index3: int


@dataclass
class Mesh:
    """
    Mesh

    material_indices[0] is the mesh's material. Writers treat its validity
    as a precondition (see core/validator.py).
    """
    vertices: List[Vertex] = field(default_factory=list)
    faces: List[Face] = field(default_factory=list)
    material_indices: List[int] = field(default_factory=list)

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def face_count(self) -> int:
        return len(self.faces)


# ==================== Materials ====================

@dataclass
class SimpleMaterial:
    """Texture filenames of a simple material, relative to the model folder"""
    diffuse_map: str = ""
    normal_map: str = ""
    specular_map: str = ""

    def image_names(self) -> List[str]:
        return [self.diffuse_map, self.normal_map, self.specular_map]


@dataclass
class Material:
    name: str
    data: Optional[SimpleMaterial] = None


# ==================== Model ====================

@dataclass
class Model:
    """
    Model
    -----
    Whole skinned-mesh model. Loaded once per conversion and discarded
    after the writer returns.
    """
    bones: List[Bone] = field(default_factory=list)
    meshes: List[Mesh] = field(default_factory=list)
    materials: List[Material] = field(default_factory=list)

    @property
    def bone_count(self) -> int:
        return len(self.bones)

    @property
    def mesh_count(self) -> int:
        return len(self.meshes)

    @property
    def vertex_count(self) -> int:
        return sum(mesh.vertex_count for mesh in self.meshes)

    @property
    def face_count(self) -> int:
        return sum(mesh.face_count for mesh in self.meshes)
