# File: writers/obj_writer.py
# Purpose: Write Wavefront .obj text (mesh only, no skeleton)
# Notes:
# - Positions are raw model units (no inch conversion)
# - One v / vn / vt triple per vertex, first UV set only
# - Faces reversed (3, 2, 1); position/uv/normal share one index
# - Indices are 1-based and global across meshes

from ..config.constants import DESC_OBJ, EXPORTER_BANNER, EXT_OBJ
from ..core.io.text_writer import TextWriter, format_general as g
from ..core.schema import Mesh, Model
from ..core.utils import iter_meshes_with_offset, material_of
from ..exporters.base_exporter import ExportContext


class ObjWriter:
    """
    ObjWriter
    ---------
    Writes a model as Wavefront OBJ.

    Output:
        # Exported via semodel-converter
        v x y z / vn x y z / vt u v     (per vertex)
        g <material> / usemtl <material>
        f c/c/c b/b/b a/a/a              (per face, reversed)
    """

    extension = EXT_OBJ
    description = DESC_OBJ

    def encode(self, model: Model, context: ExportContext) -> bytes:
        tw = TextWriter()
        tw.comment("# ", EXPORTER_BANNER)

        for _, mesh, offset in iter_meshes_with_offset(model, base=1):
            self._write_mesh(tw, model, mesh, offset)

        return tw.to_bytes()

    def _write_mesh(self, tw: TextWriter, model: Model, mesh: Mesh, offset: int) -> None:
        for vertex in mesh.vertices:
            px, py, pz = vertex.position
            nx, ny, nz = vertex.normal
            u, v = vertex.uv_sets[0]
            tw.line(f"v {g(px)} {g(py)} {g(pz)}")
            tw.line(f"vn {g(nx)} {g(ny)} {g(nz)}")
            tw.line(f"vt {g(u)} {g(v)}")

        material_name = material_of(model, mesh).name
        tw.line(f"g {material_name}")
        tw.line(f"usemtl {material_name}")

        for face in mesh.faces:
            corners = (face.index3, face.index2, face.index1)
            tw.line("f" + "".join(" {0}/{0}/{0}".format(offset + i) for i in corners))
