# File: writers/xmodel_bin_writer.py
# Purpose: Write XModel binary (.xmodel_bin, version 7)
# Notes:
# - Same section order as the ASCII XModel writer, as tagged chunks (core/io/chunk_schema.py)
# - Matrices and normals are packed int16 (32767 * v, rounded and clamped)
# - Colors are raw RGBA bytes
# - The chunk stream is assembled in memory, then wrapped in the LZ4 container

from ..config.constants import (
    DESC_XMODEL_BIN,
    EXT_XMODEL_BIN,
    MATERIAL_AMBIENT_COLOR,
    MATERIAL_BLINN,
    MATERIAL_COEFFS,
    MATERIAL_COLOR_BYTES,
    MATERIAL_GLOW,
    MATERIAL_INCANDESCENCE,
    MATERIAL_PHONG,
    MATERIAL_REFLECTIVE,
    MATERIAL_REFLECTIVE_COLOR,
    MATERIAL_REFRACTIVE,
    MATERIAL_SPECULAR_COLOR,
    MATERIAL_TRANSPARENCY,
    XMODEL_BIN_MATERIAL_TYPE,
    XMODEL_BIN_VERSION,
    XMODEL_OBJECT_NAME,
    XMODEL_UV_LAYER,
)
from ..core.formats.packed_normal import pack_normal
from ..core.formats.quaternion import quat_to_matrix
from ..core.io.chunk_schema import ChunkTag
from ..core.io.chunk_writer import ChunkWriter
from ..core.io.lz4_container import write_container
from ..core.schema import Mesh, Model
from ..core.utils import (
    cm_to_inch_vec3,
    diffuse_map_of,
    iter_meshes_with_offset,
    nonzero_weights,
)
from ..exporters.base_exporter import ExportContext


class XModelBinWriter:
    """
    XModelBinWriter
    ---------------
    Writes the XModel binary exchange format.

    Usage:
        data = XModelBinWriter().encode(model, ExportContext(out, src))
        payload = read_container(data)       # chunk stream
        for chunk in iter_chunks(payload): ...
    """

    extension = EXT_XMODEL_BIN
    description = DESC_XMODEL_BIN

    def encode(self, model: Model, context: ExportContext) -> bytes:
        return write_container(self.build_chunks(model, context))

    def build_chunks(self, model: Model, context: ExportContext) -> bytes:
        """Uncompressed chunk stream"""
        cw = ChunkWriter()

        for comment in context.header_comments():
            cw.write(ChunkTag.COMMENT, strings=[comment])
        cw.write(ChunkTag.MODEL)
        cw.write(ChunkTag.VERSION, XMODEL_BIN_VERSION)

        self._write_bones(cw, model)
        self._write_vertices(cw, model)
        self._write_faces(cw, model)
        self._write_objects(cw, model)
        self._write_materials(cw, model)

        return cw.getvalue()

    # ---- skeleton ----
    def _write_bones(self, cw: ChunkWriter, model: Model) -> None:
        cw.write(ChunkTag.BONE_COUNT, model.bone_count)
        for i, bone in enumerate(model.bones):
            cw.write(ChunkTag.BONE_INFO, i, bone.parent, strings=[bone.name])

        for i, bone in enumerate(model.bones):
            m = quat_to_matrix(bone.global_rotation)
            cw.write(ChunkTag.BONE_INDEX, i)
            cw.write(ChunkTag.OFFSET, *cm_to_inch_vec3(bone.global_position))
            cw.write(ChunkTag.BONE_MATRIX_X, *pack_normal(*m.column(0)))
            cw.write(ChunkTag.BONE_MATRIX_Y, *pack_normal(*m.column(1)))
            cw.write(ChunkTag.BONE_MATRIX_Z, *pack_normal(*m.column(2)))

    # ---- vertices ----
    def _write_vertices(self, cw: ChunkWriter, model: Model) -> None:
        cw.write(ChunkTag.VERTEX_COUNT, model.vertex_count)
        for _, mesh, offset in iter_meshes_with_offset(model):
            for i, vertex in enumerate(mesh.vertices):
                weights = nonzero_weights(vertex)
                cw.write(ChunkTag.VERTEX_INDEX, offset + i)
                cw.write(ChunkTag.OFFSET, *cm_to_inch_vec3(vertex.position))
                cw.write(ChunkTag.WEIGHT_COUNT, len(weights))
                for w in weights:
                    cw.write(ChunkTag.WEIGHT, w.bone_index, w.weight)

    # ---- faces ----
    def _write_faces(self, cw: ChunkWriter, model: Model) -> None:
        cw.write(ChunkTag.FACE_COUNT, model.face_count)
        for mesh_index, mesh, offset in iter_meshes_with_offset(model):
            material_index = mesh.material_indices[0]
            for face in mesh.faces:
                cw.write(ChunkTag.FACE_INFO, 0, mesh_index, material_index)
                self._write_face_vertex(cw, mesh, face.index1, offset)
                self._write_face_vertex(cw, mesh, face.index2, offset)
                self._write_face_vertex(cw, mesh, face.index3, offset)

    def _write_face_vertex(self, cw: ChunkWriter, mesh: Mesh, index: int, offset: int) -> None:
        vertex = mesh.vertices[index]
        cw.write(ChunkTag.VERTEX_INDEX, offset + index)
        cw.write(ChunkTag.NORMAL, *pack_normal(*vertex.normal))
        cw.write(ChunkTag.COLOR, *vertex.color)
        cw.write(ChunkTag.UV, XMODEL_UV_LAYER, *vertex.uv_sets[0])

    # ---- objects / materials ----
    def _write_objects(self, cw: ChunkWriter, model: Model) -> None:
        cw.write(ChunkTag.OBJECT_COUNT, model.mesh_count)
        for i in range(model.mesh_count):
            cw.write(ChunkTag.OBJECT_INFO, i, strings=[XMODEL_OBJECT_NAME.format(i)])

    def _write_materials(self, cw: ChunkWriter, model: Model) -> None:
        cw.write(ChunkTag.MATERIAL_COUNT, len(model.materials))
        for i, material in enumerate(model.materials):
            cw.write(
                ChunkTag.MATERIAL_INFO, i,
                strings=[material.name, XMODEL_BIN_MATERIAL_TYPE, diffuse_map_of(material)],
            )
            cw.write(ChunkTag.COLOR, *MATERIAL_COLOR_BYTES)
            cw.write(ChunkTag.MATERIAL_TRANSPARENCY, *MATERIAL_TRANSPARENCY)
            cw.write(ChunkTag.MATERIAL_AMBIENT_COLOR, *MATERIAL_AMBIENT_COLOR)
            cw.write(ChunkTag.MATERIAL_INCANDESCENCE, *MATERIAL_INCANDESCENCE)
            cw.write(ChunkTag.MATERIAL_COEFFS, *MATERIAL_COEFFS)
            cw.write(ChunkTag.MATERIAL_GLOW, *MATERIAL_GLOW)
            cw.write(ChunkTag.MATERIAL_REFRACTIVE, *MATERIAL_REFRACTIVE)
            cw.write(ChunkTag.MATERIAL_SPECULAR_COLOR, *MATERIAL_SPECULAR_COLOR)
            cw.write(ChunkTag.MATERIAL_REFLECTIVE_COLOR, *MATERIAL_REFLECTIVE_COLOR)
            cw.write(ChunkTag.MATERIAL_REFLECTIVE, *MATERIAL_REFLECTIVE)
            cw.write(ChunkTag.MATERIAL_BLINN, *MATERIAL_BLINN)
            cw.write(ChunkTag.MATERIAL_PHONG, MATERIAL_PHONG)
