# File: writers/xmodel_export_writer.py
# Purpose: Write XModel ASCII (.xmodel_export, version 6)
# Notes:
# - Bones use GLOBAL transforms: offset in inches, rotation as matrix columns
# - Vertex and face sections share one global vertex index across meshes
# - Face corners written 1, 2, 3; normals raw, colors scaled to [0, 1]
# - One OBJECT per mesh (names synthesized), materials use fixed shading lines

from ..config.constants import (
    DESC_XMODEL_EXPORT,
    EXT_XMODEL_EXPORT,
    MATERIAL_AMBIENT_COLOR,
    MATERIAL_BLINN,
    MATERIAL_COEFFS,
    MATERIAL_COLOR,
    MATERIAL_GLOW,
    MATERIAL_INCANDESCENCE,
    MATERIAL_PHONG,
    MATERIAL_REFLECTIVE,
    MATERIAL_REFLECTIVE_COLOR,
    MATERIAL_REFRACTIVE,
    MATERIAL_SPECULAR_COLOR,
    MATERIAL_TRANSPARENCY,
    XMODEL_EXPORT_MATERIAL_TYPE,
    XMODEL_EXPORT_VERSION,
    XMODEL_OBJECT_NAME,
    XMODEL_UV_LAYER,
)
from ..core.formats.quaternion import quat_to_matrix
from ..core.io.text_writer import TextWriter, format_fixed as f6
from ..core.schema import Mesh, Model
from ..core.utils import (
    cm_to_inch_vec3,
    diffuse_map_of,
    iter_meshes_with_offset,
    nonzero_weights,
)
from ..exporters.base_exporter import ExportContext


def _f6_all(values) -> str:
    return " ".join(f6(v) for v in values)


class XModelExportWriter:
    """
    XModelExportWriter
    ------------------
    Writes the XModel ASCII exchange format.

    Section order:
        // comments, MODEL, VERSION 6
        NUMBONES / BONE i parent "name" / per bone OFFSET + X/Y/Z
        NUMVERTS / VERT g, OFFSET, BONES k, BONE b w
        NUMFACES / TRI mesh material 0 0 + 3 corners
        NUMOBJECTS / NUMMATERIALS
    """

    extension = EXT_XMODEL_EXPORT
    description = DESC_XMODEL_EXPORT

    def encode(self, model: Model, context: ExportContext) -> bytes:
        tw = TextWriter()

        for comment in context.header_comments():
            tw.comment("// ", comment)
        tw.line("MODEL")
        tw.line(f"VERSION {XMODEL_EXPORT_VERSION}")

        self._write_bones(tw, model)
        self._write_vertices(tw, model)
        self._write_faces(tw, model)
        self._write_objects(tw, model)
        self._write_materials(tw, model)

        return tw.to_bytes()

    # ---- skeleton ----
    def _write_bones(self, tw: TextWriter, model: Model) -> None:
        tw.line(f"NUMBONES {model.bone_count}")
        for i, bone in enumerate(model.bones):
            tw.line(f'BONE {i} {bone.parent} "{bone.name}"')

        for i, bone in enumerate(model.bones):
            m = quat_to_matrix(bone.global_rotation)
            tw.line(f"BONE {i}")
            tw.line("OFFSET " + _f6_all(cm_to_inch_vec3(bone.global_position)))
            tw.line("X " + _f6_all(m.column(0)))
            tw.line("Y " + _f6_all(m.column(1)))
            tw.line("Z " + _f6_all(m.column(2)))

    # ---- vertices ----
    def _write_vertices(self, tw: TextWriter, model: Model) -> None:
        tw.line(f"NUMVERTS {model.vertex_count}")
        for _, mesh, offset in iter_meshes_with_offset(model):
            for i, vertex in enumerate(mesh.vertices):
                weights = nonzero_weights(vertex)
                tw.line(f"VERT {offset + i}")
                tw.line("OFFSET " + _f6_all(cm_to_inch_vec3(vertex.position)))
                tw.line(f"BONES {len(weights)}")
                for w in weights:
                    tw.line(f"BONE {w.bone_index} {f6(w.weight)}")

    # ---- faces ----
    def _write_faces(self, tw: TextWriter, model: Model) -> None:
        tw.line(f"NUMFACES {model.face_count}")
        for mesh_index, mesh, offset in iter_meshes_with_offset(model):
            material_index = mesh.material_indices[0]
            for face in mesh.faces:
                tw.line(f"TRI {mesh_index} {material_index} 0 0")
                self._write_face_vertex(tw, mesh, face.index1, offset)
                self._write_face_vertex(tw, mesh, face.index2, offset)
                self._write_face_vertex(tw, mesh, face.index3, offset)

    def _write_face_vertex(self, tw: TextWriter, mesh: Mesh, index: int, offset: int) -> None:
        vertex = mesh.vertices[index]
        u, v = vertex.uv_sets[0]
        tw.line(f"VERT {offset + index}")
        tw.line("NORMAL " + _f6_all(vertex.normal))
        tw.line("COLOR " + _f6_all(c / 255.0 for c in vertex.color))
        tw.line(f"UV {XMODEL_UV_LAYER} {f6(u)} {f6(v)}")

    # ---- objects / materials ----
    def _write_objects(self, tw: TextWriter, model: Model) -> None:
        tw.line(f"NUMOBJECTS {model.mesh_count}")
        for i in range(model.mesh_count):
            tw.line(f'OBJECT {i} "{XMODEL_OBJECT_NAME.format(i)}"')

    def _write_materials(self, tw: TextWriter, model: Model) -> None:
        tw.line(f"NUMMATERIALS {len(model.materials)}")
        for i, material in enumerate(model.materials):
            tw.line(
                f'MATERIAL {i} "{material.name}" '
                f'"{XMODEL_EXPORT_MATERIAL_TYPE}" "{diffuse_map_of(material)}"'
            )
            tw.line("COLOR " + _f6_all(MATERIAL_COLOR))
            tw.line("TRANSPARENCY " + _f6_all(MATERIAL_TRANSPARENCY))
            tw.line("AMBIENTCOLOR " + _f6_all(MATERIAL_AMBIENT_COLOR))
            tw.line("INCANDESCENCE " + _f6_all(MATERIAL_INCANDESCENCE))
            tw.line("COEFFS " + _f6_all(MATERIAL_COEFFS))
            # integer fields stay unformatted (GLOW ... 0, REFRACTIVE 6 ..., REFLECTIVE -1 ...)
            tw.line(f"GLOW {f6(MATERIAL_GLOW[0])} {MATERIAL_GLOW[1]}")
            tw.line(f"REFRACTIVE {MATERIAL_REFRACTIVE[0]} {f6(MATERIAL_REFRACTIVE[1])}")
            tw.line("SPECULARCOLOR " + _f6_all(MATERIAL_SPECULAR_COLOR))
            tw.line("REFLECTIVECOLOR " + _f6_all(MATERIAL_REFLECTIVE_COLOR))
            tw.line(f"REFLECTIVE {MATERIAL_REFLECTIVE[0]} {f6(MATERIAL_REFLECTIVE[1])}")
            tw.line("BLINN " + _f6_all(MATERIAL_BLINN))
            tw.line(f"PHONG {f6(MATERIAL_PHONG)}")
