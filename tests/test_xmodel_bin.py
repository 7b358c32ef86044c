import struct
import unittest
from collections import Counter

from semodel_converter.core.errors import ChunkError, ContainerError
from semodel_converter.core.io.chunk_schema import ChunkTag, aligned_string_size
from semodel_converter.core.io.chunk_writer import ChunkWriter, iter_chunks
from semodel_converter.core.io.lz4_container import HEADER_SIZE, read_container, write_container
from semodel_converter.core.schema import Bone, BoneWeight, Material
from semodel_converter.exporters.base_exporter import ExportContext
from semodel_converter.validators.structure_checker import StructureChecker
from semodel_converter.writers.xmodel_bin_writer import XModelBinWriter

from tests.model_factory import FIXED_TIME, triangle_model


def context():
    return ExportContext(output_path="out/model.xmodel_bin", source_path="in/model.semodel",
                         export_time=FIXED_TIME)


def decode(model):
    return list(iter_chunks(read_container(XModelBinWriter().encode(model, context()))))


class ChunkWriterTests(unittest.TestCase):
    def test_tag_widths(self) -> None:
        cw = ChunkWriter()
        cw.write(ChunkTag.MODEL)
        cw.write(ChunkTag.VERSION, 7)
        self.assertEqual(cw.getvalue(), b"\xc8\x46\x00\x00" + b"\xd1\x24\x07\x00")
        self.assertEqual(cw.chunk_count, 2)

    def test_aligned_strings(self) -> None:
        self.assertEqual(aligned_string_size(0), 4)
        self.assertEqual(aligned_string_size(3), 4)
        self.assertEqual(aligned_string_size(4), 8)

        cw = ChunkWriter()
        cw.write(ChunkTag.COMMENT, strings=["abc"])
        cw.write(ChunkTag.COMMENT, strings=["abcd"])
        self.assertEqual(
            cw.getvalue(),
            b"\x55\xc3\x00\x00abc\x00" + b"\x55\xc3\x00\x00abcd\x00\x00\x00\x00",
        )

    def test_non_ascii_becomes_question_mark(self) -> None:
        cw = ChunkWriter()
        cw.write(ChunkTag.OBJECT_INFO, 0, strings=["bøne"])
        chunk = next(iter_chunks(cw.getvalue()))
        self.assertEqual(chunk.strings, ("b?ne",))

    def test_string_count_is_checked(self) -> None:
        with self.assertRaises(ValueError):
            ChunkWriter().write(ChunkTag.MATERIAL_INFO, 0, strings=["only one"])

    def test_unknown_tag(self) -> None:
        with self.assertRaises(ChunkError):
            list(iter_chunks(b"\x00\x00\x00\x00"))

    def test_truncated_payload(self) -> None:
        cw = ChunkWriter()
        cw.write(ChunkTag.OFFSET, 1.0, 2.0, 3.0)
        with self.assertRaises(ChunkError):
            list(iter_chunks(cw.getvalue()[:-2]))


class ContainerTests(unittest.TestCase):
    def test_round_trip(self) -> None:
        payload = b"chunk stream " * 100
        data = write_container(payload)
        self.assertEqual(data[:5], b"*LZ4*")
        self.assertEqual(struct.unpack_from("<I", data, 5)[0], len(payload))
        self.assertEqual(read_container(data), payload)

    def test_bad_magic(self) -> None:
        data = bytearray(write_container(b"payload"))
        data[0:5] = b"LZ4!!"
        with self.assertRaises(ContainerError):
            read_container(bytes(data))

    def test_truncated_header(self) -> None:
        with self.assertRaises(ContainerError):
            read_container(b"*LZ4*\x01")

    def test_length_mismatch(self) -> None:
        data = bytearray(write_container(b"payload" * 10))
        struct.pack_into("<I", data, 5, 1000)
        with self.assertRaises(ContainerError):
            read_container(bytes(data))


class XModelBinWriterTests(unittest.TestCase):
    def test_header_chunks(self) -> None:
        chunks = decode(triangle_model())
        self.assertEqual([c.tag for c in chunks[:6]], [ChunkTag.COMMENT] * 4 + [ChunkTag.MODEL, ChunkTag.VERSION])
        self.assertEqual(chunks[0].strings, ("Exported via semodel-converter",))
        self.assertEqual(chunks[3].strings, (f"Export time: {FIXED_TIME}",))
        self.assertEqual(chunks[5].values, (7,))

    def test_counts_match_model(self) -> None:
        model = triangle_model(mesh_count=2, bone_count=3)
        counts = Counter(c.tag for c in decode(model))
        self.assertEqual(counts[ChunkTag.BONE_INFO], 3)
        self.assertEqual(counts[ChunkTag.BONE_INDEX], 3)
        self.assertEqual(counts[ChunkTag.BONE_MATRIX_X], 3)
        self.assertEqual(counts[ChunkTag.FACE_INFO], 2)
        # one per vertex record plus three per face
        self.assertEqual(counts[ChunkTag.VERTEX_INDEX], 6 + 3 * 2)
        self.assertEqual(counts[ChunkTag.NORMAL], 6)
        self.assertEqual(counts[ChunkTag.OBJECT_INFO], 2)
        self.assertEqual(counts[ChunkTag.MATERIAL_INFO], 1)
        # face corners plus one per material
        self.assertEqual(counts[ChunkTag.COLOR], 6 + 1)

    def test_container_length(self) -> None:
        model = triangle_model()
        writer = XModelBinWriter()
        payload = writer.build_chunks(model, context())
        data = writer.encode(model, context())
        self.assertEqual(struct.unpack_from("<I", data, 5)[0], len(payload))
        self.assertEqual(read_container(data), payload)
        self.assertGreater(len(data), HEADER_SIZE)

    def test_weights_skip_zero(self) -> None:
        weights = [BoneWeight(0, 0.7), BoneWeight(1, 0.0), BoneWeight(2, 0.3)]
        chunks = decode(triangle_model(weights=weights, bone_count=3))
        weight_counts = [c.values[0] for c in chunks if c.tag is ChunkTag.WEIGHT_COUNT]
        pairs = [c.values for c in chunks if c.tag is ChunkTag.WEIGHT]
        self.assertEqual(weight_counts, [2, 2, 2])
        self.assertEqual(len(pairs), sum(weight_counts))
        self.assertEqual([p[0] for p in pairs[:2]], [0, 2])
        self.assertAlmostEqual(pairs[0][1], 0.7, places=6)

    def test_vertex_indices_contiguous(self) -> None:
        chunks = decode(triangle_model(mesh_count=3))
        face_count_at = next(i for i, c in enumerate(chunks) if c.tag is ChunkTag.FACE_COUNT)
        indices = [c.values[0] for c in chunks[:face_count_at] if c.tag is ChunkTag.VERTEX_INDEX]
        self.assertEqual(indices, list(range(9)))

    def test_face_records(self) -> None:
        model = triangle_model(mesh_count=2, color=(10, 20, 30, 40))
        chunks = decode(model)
        i = next(i for i, c in enumerate(chunks) if c.tag is ChunkTag.FACE_INFO)
        self.assertEqual(chunks[i].values, (0, 0, 0))
        self.assertEqual([c.tag for c in chunks[i + 1:i + 5]], [
            ChunkTag.VERTEX_INDEX, ChunkTag.NORMAL, ChunkTag.COLOR, ChunkTag.UV,
        ])
        self.assertEqual(chunks[i + 2].values, (0, 0, 32767))
        self.assertEqual(chunks[i + 3].values, (10, 20, 30, 40))
        self.assertEqual(chunks[i + 4].values, (1, 0.0, 0.0))

        second = [c for c in chunks if c.tag is ChunkTag.FACE_INFO][1]
        self.assertEqual(second.values, (0, 1, 0))

    def test_bone_records(self) -> None:
        model = triangle_model()
        model.bones = [Bone("root", -1, global_position=(2.54, 0.0, 0.0))]
        chunks = decode(model)
        info = next(c for c in chunks if c.tag is ChunkTag.BONE_INFO)
        self.assertEqual(info.values, (0, -1))
        self.assertEqual(info.strings, ("root",))
        i = next(i for i, c in enumerate(chunks) if c.tag is ChunkTag.BONE_INDEX)
        self.assertAlmostEqual(chunks[i + 1].values[0], 1.0, places=6)
        self.assertEqual(chunks[i + 2].values, (32767, 0, 0))
        self.assertEqual(chunks[i + 3].values, (0, 32767, 0))
        self.assertEqual(chunks[i + 4].values, (0, 0, 32767))

    def test_material_records(self) -> None:
        model = triangle_model()
        model.materials.append(Material("plain"))
        chunks = decode(model)
        infos = [c for c in chunks if c.tag is ChunkTag.MATERIAL_INFO]
        self.assertEqual(infos[0].strings, ("mat0", "lambert", "mat0_c.png"))
        self.assertEqual(infos[1].strings, ("plain", "lambert", "no_image.png"))
        self.assertEqual(chunks[-1].tag, ChunkTag.MATERIAL_PHONG)
        self.assertEqual(chunks[-1].values, (-1.0,))

    def test_structure_checker_accepts_output(self) -> None:
        data = XModelBinWriter().encode(triangle_model(mesh_count=2, bone_count=2), context())
        report = StructureChecker().check_bytes(data, "model.xmodel_bin")
        self.assertEqual(report["errors"], [])
        self.assertEqual(report["version"], 7)
        self.assertEqual(report["counts"], {
            "bones": 2, "vertices": 6, "faces": 2, "objects": 2, "materials": 1,
        })

    def test_structure_checker_reports_bad_container(self) -> None:
        report = StructureChecker().check_bytes(b"not a container", "broken.xmodel_bin")
        self.assertEqual(len(report["errors"]), 1)


if __name__ == "__main__":
    unittest.main()
