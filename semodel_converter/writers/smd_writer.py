# File: writers/smd_writer.py
# Purpose: Write Valve Studiomdl Data (.smd) text
# Notes:
# - Blocks: version / comments / nodes / skeleton (single frame, time 0) / triangles
# - Skeleton uses LOCAL transforms: position in inches, rotation as XYZ euler radians
# - One triangles block per mesh, corners written 3, 2, 1
# - Normals are normalized on output (the model is left untouched)
# - V is flipped (1 - v); zero weights are dropped

from ..config.constants import DESC_SMD, EXT_SMD, SMD_VERSION
from ..core.formats.quaternion import quat_to_euler
from ..core.io.text_writer import TextWriter, format_fixed as f6
from ..core.schema import Model, Vertex
from ..core.utils import cm_to_inch_vec3, material_of, nonzero_weights, normalize_vector
from ..exporters.base_exporter import ExportContext


class SmdWriter:
    """
    SmdWriter
    ---------
    Writes a skinned model as a reference SMD.

    Vertex line:
        0 x y z nx ny nz u v' count [bone weight]*
    """

    extension = EXT_SMD
    description = DESC_SMD

    def encode(self, model: Model, context: ExportContext) -> bytes:
        tw = TextWriter()

        tw.line(f"version {SMD_VERSION}")
        for comment in context.header_comments():
            tw.comment("// ", comment)

        self._write_nodes(tw, model)
        self._write_skeleton(tw, model)
        self._write_triangles(tw, model)

        return tw.to_bytes()

    # ---- blocks ----
    def _write_nodes(self, tw: TextWriter, model: Model) -> None:
        tw.line("nodes")
        for i, bone in enumerate(model.bones):
            tw.line(f'{i} "{bone.name}" {bone.parent}')
        tw.line("end")

    def _write_skeleton(self, tw: TextWriter, model: Model) -> None:
        tw.line("skeleton")
        tw.line("time 0")
        for i, bone in enumerate(model.bones):
            px, py, pz = cm_to_inch_vec3(bone.local_position)
            rx, ry, rz = quat_to_euler(bone.local_rotation)
            tw.line(f"{i} {f6(px)} {f6(py)} {f6(pz)} {f6(rx)} {f6(ry)} {f6(rz)}")
        tw.line("end")

    def _write_triangles(self, tw: TextWriter, model: Model) -> None:
        for mesh in model.meshes:
            tw.line("triangles")
            material_name = material_of(model, mesh).name
            for face in mesh.faces:
                tw.line(material_name)
                self._write_face_point(tw, mesh.vertices[face.index3])
                self._write_face_point(tw, mesh.vertices[face.index2])
                self._write_face_point(tw, mesh.vertices[face.index1])
            tw.line("end")

    def _write_face_point(self, tw: TextWriter, vertex: Vertex) -> None:
        px, py, pz = cm_to_inch_vec3(vertex.position)
        nx, ny, nz = normalize_vector(vertex.normal)
        u, v = vertex.uv_sets[0]
        weights = nonzero_weights(vertex)

        parts = [
            "0",
            f6(px), f6(py), f6(pz),
            f6(nx), f6(ny), f6(nz),
            f6(u), f6(1 - v),
            str(len(weights)),
        ]
        for w in weights:
            parts.append(str(w.bone_index))
            parts.append(f6(w.weight))
        tw.line(" ".join(parts))
