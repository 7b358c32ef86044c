import math
import unittest

from semodel_converter.core.formats import (
    clamp_float_to_int16, pack_normal, quat_to_euler, quat_to_matrix,
)
from semodel_converter.core.io.text_writer import TextWriter, format_fixed, format_general
from semodel_converter.core.schema import BoneWeight, Mesh, Vertex
from semodel_converter.core.utils import (
    cm_to_inch, material_of, mesh_vertex_offsets, nonzero_weights, normalize_vector,
)

from tests.model_factory import triangle_model


class UnitConversionTests(unittest.TestCase):
    def test_cm_to_inch(self) -> None:
        self.assertAlmostEqual(cm_to_inch(2.54), 1.0, delta=1e-9)
        self.assertEqual(cm_to_inch(0.0), 0.0)

    def test_normalize_vector(self) -> None:
        x, y, z = normalize_vector((3.0, 0.0, 4.0))
        self.assertAlmostEqual(x, 0.6)
        self.assertAlmostEqual(y, 0.0)
        self.assertAlmostEqual(z, 0.8)

    def test_normalize_zero_vector_is_unchanged(self) -> None:
        self.assertEqual(normalize_vector((0.0, 0.0, 0.0)), (0.0, 0.0, 0.0))


class QuaternionTests(unittest.TestCase):
    def test_identity_euler(self) -> None:
        self.assertEqual(quat_to_euler((0.0, 0.0, 0.0, 1.0)), (0.0, 0.0, 0.0))

    def test_identity_matrix(self) -> None:
        m = quat_to_matrix((0.0, 0.0, 0.0, 1.0))
        self.assertEqual(m.rows(), ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)))

    def test_quarter_turn_about_z(self) -> None:
        s = math.sqrt(0.5)
        rx, ry, rz = quat_to_euler((0.0, 0.0, s, s))
        self.assertAlmostEqual(rx, 0.0)
        self.assertAlmostEqual(ry, 0.0)
        self.assertAlmostEqual(rz, math.pi / 2)

        m = quat_to_matrix((0.0, 0.0, s, s))
        for actual, expected in zip(m.column(0), (0.0, 1.0, 0.0)):
            self.assertAlmostEqual(actual, expected)
        for actual, expected in zip(m.column(1), (-1.0, 0.0, 0.0)):
            self.assertAlmostEqual(actual, expected)

    def test_matrix_scales_non_unit_quaternion(self) -> None:
        m = quat_to_matrix((0.0, 0.0, 0.0, 2.0))
        self.assertAlmostEqual(m.x[0], 1.0)
        self.assertAlmostEqual(m.y[1], 1.0)
        self.assertAlmostEqual(m.z[2], 1.0)

    def test_euler_clamps_asin_argument(self) -> None:
        # slightly over unit length, 2(wy - zx) > 1
        rx, ry, rz = quat_to_euler((0.0, 0.7072, 0.0, 0.7072))
        self.assertAlmostEqual(ry, math.pi / 2)


class Int16PackingTests(unittest.TestCase):
    def test_clamp_float_to_int16(self) -> None:
        self.assertEqual(clamp_float_to_int16(1.0), 32767)
        self.assertEqual(clamp_float_to_int16(-1.0), -32767)
        self.assertEqual(clamp_float_to_int16(0.0), 0)
        self.assertEqual(clamp_float_to_int16(2.0), 32767)
        self.assertEqual(clamp_float_to_int16(-2.0), -32768)

    def test_clamp_rounds(self) -> None:
        self.assertEqual(clamp_float_to_int16(0.5), 16384)
        self.assertEqual(clamp_float_to_int16(0.1), 3277)

    def test_pack_normal_does_not_normalize(self) -> None:
        self.assertEqual(pack_normal(0.0, 0.0, 2.0), (0, 0, 32767))


class VertexOffsetTests(unittest.TestCase):
    def _mesh(self, count):
        return Mesh(vertices=[Vertex() for _ in range(count)])

    def test_offsets_are_prefix_sums(self) -> None:
        meshes = [self._mesh(3), self._mesh(2), self._mesh(4)]
        self.assertEqual(mesh_vertex_offsets(meshes), [0, 3, 5])
        self.assertEqual(mesh_vertex_offsets(meshes, base=1), [1, 4, 6])

    def test_empty_model_has_no_offsets(self) -> None:
        self.assertEqual(mesh_vertex_offsets([]), [])

    def test_empty_mesh_does_not_advance(self) -> None:
        meshes = [self._mesh(2), self._mesh(0), self._mesh(1)]
        self.assertEqual(mesh_vertex_offsets(meshes), [0, 2, 2])


class WeightAndMaterialTests(unittest.TestCase):
    def test_nonzero_weights_keeps_order(self) -> None:
        vertex = Vertex(weights=[BoneWeight(0, 0.7), BoneWeight(1, 0.0), BoneWeight(2, 0.3)])
        self.assertEqual(
            [(w.bone_index, w.weight) for w in nonzero_weights(vertex)],
            [(0, 0.7), (2, 0.3)],
        )

    def test_material_of_rejects_negative_index(self) -> None:
        model = triangle_model(material_index=-1)
        with self.assertRaises(IndexError):
            material_of(model, model.meshes[0])

    def test_material_of_out_of_range(self) -> None:
        model = triangle_model(material_index=5)
        with self.assertRaises(IndexError):
            material_of(model, model.meshes[0])


class NumberFormatTests(unittest.TestCase):
    def test_format_general(self) -> None:
        self.assertEqual(format_general(1.0), "1")
        self.assertEqual(format_general(-2.0), "-2")
        self.assertEqual(format_general(0.5), "0.5")
        self.assertEqual(format_general(0.1), "0.1")
        self.assertEqual(format_general(1e-05), "1E-05")
        self.assertEqual(format_general(1.5e20), "1.5E+20")

    def test_format_general_keeps_fifteen_significant_digits(self) -> None:
        # 0.1 stored as float32 and widened back to double
        self.assertEqual(format_general(0.10000000149011612), "0.100000001490116")
        self.assertEqual(format_general(0.0001), "0.0001")
        self.assertEqual(format_general(123456789012345.0), "123456789012345")
        self.assertEqual(format_general(1e15), "1E+15")
        self.assertEqual(format_general(-0.0), "0")
        self.assertEqual(format_general(float("nan")), "NaN")

    def test_format_fixed(self) -> None:
        self.assertEqual(format_fixed(1), "1.000000")
        self.assertEqual(format_fixed(-0.25), "-0.250000")

    def test_text_writer_line_endings(self) -> None:
        tw = TextWriter()
        tw.line("a")
        tw.fields("b", 1, 2)
        self.assertEqual(tw.to_bytes(), b"a\nb 1 2\n")
        self.assertEqual(tw.line_count, 2)


if __name__ == "__main__":
    unittest.main()
