# File: core/validator.py
# Purpose: Input-contract checks callers may run before converting a model
# Notes:
# - Writers do not defend against these; a violation raises IndexError mid-write
# - Errors: conditions that abort a conversion (material / UV / face index)
# - Warnings: conditions that convert but produce questionable output
# - Every message starts with its audit error code

import math
from typing import List, Tuple

from .schema import Mesh, Model

INT16_LIMIT = 0x7FFF


# ---------------------------
# Materials
# ---------------------------

def validate_material_references(model: Model) -> List[str]:
    errors: List[str] = []
    for i, mesh in enumerate(model.meshes):
        if not mesh.material_indices:
            errors.append(f"MAT002 Mesh {i} has no material reference")
            continue
        index = mesh.material_indices[0]
        if not 0 <= index < len(model.materials):
            errors.append(
                f"MAT001 Mesh {i} references material {index}, "
                f"model has {len(model.materials)}"
            )
    return errors


# ---------------------------
# UV sets
# ---------------------------

def validate_uv_sets(model: Model) -> List[str]:
    errors: List[str] = []
    for i, mesh in enumerate(model.meshes):
        missing = sum(1 for v in mesh.vertices if not v.uv_sets)
        if missing:
            errors.append(f"UV003 Mesh {i}: {missing} vertex(es) without a UV set")
    return errors


# ---------------------------
# Indices
# ---------------------------

def _validate_faces(mesh_index: int, mesh: Mesh) -> List[str]:
    errors: List[str] = []
    count = mesh.vertex_count
    for j, face in enumerate(mesh.faces):
        for index in (face.index1, face.index2, face.index3):
            if not 0 <= index < count:
                errors.append(
                    f"GEO002 Mesh {mesh_index} face {j} references vertex {index}, "
                    f"mesh has {count}"
                )
                break
    return errors


def validate_geometry(model: Model) -> Tuple[List[str], List[str]]:
    errors: List[str] = []
    warnings: List[str] = []

    for i, mesh in enumerate(model.meshes):
        if mesh.vertex_count == 0:
            warnings.append(f"GEO001 Mesh {i} has no vertices")
        errors.extend(_validate_faces(i, mesh))

        for j, vertex in enumerate(mesh.vertices):
            for w in vertex.weights:
                if w.weight != 0.0 and not 0 <= w.bone_index < model.bone_count:
                    warnings.append(
                        f"GEO003 Mesh {i} vertex {j} weights missing bone {w.bone_index}"
                    )
            if not all(math.isfinite(c) for c in vertex.position):
                warnings.append(f"GEO001 Mesh {i} vertex {j} has a non-finite position")

    for i, bone in enumerate(model.bones):
        if bone.parent != -1 and not 0 <= bone.parent < model.bone_count:
            warnings.append(f"GEO004 Bone {i} ({bone.name}) parent {bone.parent} out of range")

    return errors, warnings


# ---------------------------
# Binary limits
# ---------------------------

def validate_binary_limits(model: Model) -> List[str]:
    """XModel binary stores bone / object / material counts as int16"""
    warnings: List[str] = []
    for label, count in (
        ("bones", model.bone_count),
        ("meshes", model.mesh_count),
        ("materials", len(model.materials)),
    ):
        if count > INT16_LIMIT:
            warnings.append(f"FMT001 {count} {label} exceed the XModel binary limit of {INT16_LIMIT}")
    return warnings


# ---------------------------
# Combined
# ---------------------------

def validate_model(model: Model) -> Tuple[List[str], List[str]]:
    """
    Run every check

    Returns:
        (errors, warnings); a model with no errors converts without IndexError
    """
    errors: List[str] = []
    warnings: List[str] = []

    errors.extend(validate_material_references(model))
    errors.extend(validate_uv_sets(model))

    geo_errors, geo_warnings = validate_geometry(model)
    errors.extend(geo_errors)
    warnings.extend(geo_warnings)

    warnings.extend(validate_binary_limits(model))
    return errors, warnings
