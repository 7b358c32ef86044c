import os
import tempfile
import unittest

from semodel_converter.core.errors import ModelParseError
from semodel_converter.core.io.semodel_reader import parse_semodel, read_bone_count, read_semodel
from semodel_converter.core.schema import BoneWeight, Material

from tests.model_factory import pack_semodel, triangle_model


class SEModelReaderTests(unittest.TestCase):
    def _source(self):
        model = triangle_model(bone_count=2, weights=[BoneWeight(0, 0.75), BoneWeight(1, 0.25)],
                               color=(1, 2, 3, 4))
        model.bones[1].global_rotation = (0.0, 0.0, 0.5, 0.5)
        return model

    def test_parse(self) -> None:
        model = parse_semodel(pack_semodel(self._source()))

        self.assertEqual([b.name for b in model.bones], ["root", "bone1"])
        self.assertEqual(model.bones[1].parent, 0)
        self.assertEqual(model.bones[1].local_position, (0.0, 2.5399999618530273, 0.0))
        self.assertEqual(model.bones[1].global_rotation, (0.0, 0.0, 0.5, 0.5))

        self.assertEqual(model.mesh_count, 1)
        mesh = model.meshes[0]
        self.assertEqual(mesh.vertex_count, 3)
        self.assertEqual(mesh.vertices[1].position, (1.0, 0.0, 0.0))
        self.assertEqual(mesh.vertices[2].uv_sets, [(0.0, 1.0)])
        self.assertEqual(mesh.vertices[0].normal, (0.0, 0.0, 1.0))
        self.assertEqual(mesh.vertices[0].color, (1, 2, 3, 4))
        self.assertEqual(
            [(w.bone_index, w.weight) for w in mesh.vertices[0].weights],
            [(0, 0.75), (1, 0.25)],
        )
        self.assertEqual([(f.index1, f.index2, f.index3) for f in mesh.faces], [(0, 1, 2)])
        self.assertEqual(mesh.material_indices, [0])

        self.assertEqual(model.materials[0].name, "mat0")
        self.assertEqual(model.materials[0].data.normal_map, "mat0_n.png")

    def test_material_without_simple_data(self) -> None:
        source = self._source()
        source.materials = [Material("plain")]
        model = parse_semodel(pack_semodel(source))
        self.assertIsNone(model.materials[0].data)

    def test_bad_magic(self) -> None:
        data = b"XXModel" + pack_semodel(self._source())[7:]
        with self.assertRaises(ModelParseError):
            parse_semodel(data)

    def test_truncated(self) -> None:
        data = pack_semodel(self._source())
        with self.assertRaises(ModelParseError):
            parse_semodel(data[:-10])

    def test_read_from_disk(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = os.path.join(temp_dir, "model.semodel")
            with open(path, "wb") as f:
                f.write(pack_semodel(self._source()))
            self.assertEqual(read_semodel(path).bone_count, 2)
            self.assertEqual(read_bone_count(path), 2)


if __name__ == "__main__":
    unittest.main()
