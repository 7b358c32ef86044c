import argparse
import contextlib
import io
import os
import tempfile
import unittest

from semodel_converter.__main__ import main
from semodel_converter.config.export_settings import ExportSettings
from semodel_converter.core.schema import BoneWeight, Face
from semodel_converter.core.validator import validate_model

from tests.model_factory import pack_semodel, triangle_model


def run_cli(*argv):
    out = io.StringIO()
    err = io.StringIO()
    with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
        status = main(list(argv))
    return status, out.getvalue(), err.getvalue()


class ValidatorTests(unittest.TestCase):
    def test_valid_model(self) -> None:
        self.assertEqual(validate_model(triangle_model()), ([], []))

    def test_bad_material_index(self) -> None:
        errors, _ = validate_model(triangle_model(material_index=2))
        self.assertEqual(len(errors), 1)
        self.assertTrue(errors[0].startswith("MAT001"))

    def test_missing_uv_and_bad_face(self) -> None:
        model = triangle_model()
        model.meshes[0].vertices[0].uv_sets = []
        model.meshes[0].faces.append(Face(0, 1, 5))
        errors, _ = validate_model(model)
        self.assertEqual([e[:6] for e in errors], ["UV003 ", "GEO002"])

    def test_warnings(self) -> None:
        model = triangle_model(weights=[BoneWeight(4, 1.0)])
        model.bones[0].parent = 3
        errors, warnings = validate_model(model)
        self.assertEqual(errors, [])
        self.assertTrue(any(w.startswith("GEO003") for w in warnings))
        self.assertTrue(any(w.startswith("GEO004") for w in warnings))


class ExportSettingsTests(unittest.TestCase):
    def test_defaults(self) -> None:
        settings = ExportSettings()
        self.assertTrue(settings.overwrite)
        self.assertFalse(settings.copy_images)
        self.assertEqual(settings.default_extension, ".obj")

    def test_from_args_keeps_defaults_for_missing_values(self) -> None:
        args = argparse.Namespace(overwrite=None, prefix="p_", verbose=True)
        settings = ExportSettings.from_args(args)
        self.assertTrue(settings.overwrite)
        self.assertEqual(settings.prefix, "p_")
        self.assertTrue(settings.verbose)

    def test_from_dict_rejects_unknown_keys(self) -> None:
        with self.assertRaises(KeyError):
            ExportSettings.from_dict({"axis_mode": "Z_UP"})


class CommandLineTests(unittest.TestCase):
    def setUp(self) -> None:
        self._temp = tempfile.TemporaryDirectory()
        self.temp_dir = self._temp.name
        self.models_dir = os.path.join(self.temp_dir, "models")
        os.makedirs(os.path.join(self.models_dir, "sub"))
        for name in ("a.semodel", os.path.join("sub", "b.semodel")):
            with open(os.path.join(self.models_dir, name), "wb") as f:
                f.write(pack_semodel(triangle_model()))
        with open(os.path.join(self.models_dir, "notes.txt"), "w") as f:
            f.write("ignored")

    def tearDown(self) -> None:
        self._temp.cleanup()

    def test_formats(self) -> None:
        status, out, _ = run_cli("formats")
        self.assertEqual(status, 0)
        self.assertIn(".xmodel_bin: XModel Binary File (Call of Duty)", out)

    def test_convert_folder_then_inspect(self) -> None:
        out_dir = os.path.join(self.temp_dir, "out")
        status, out, _ = run_cli("convert", self.models_dir, "-f", "xmodel_bin", "-o", out_dir)
        self.assertEqual(status, 0)
        self.assertIn("[2/2]", out)
        self.assertEqual(sorted(os.listdir(out_dir)), ["a.xmodel_bin", "b.xmodel_bin"])

        status, out, _ = run_cli("inspect", os.path.join(out_dir, "a.xmodel_bin"))
        self.assertEqual(status, 0)
        self.assertIn("Version: 7", out)
        self.assertIn("vertices: 3", out)

    def test_convert_unknown_format(self) -> None:
        status, _, err = run_cli("convert", self.models_dir, "-f", ".fbx", "-o", self.temp_dir)
        self.assertEqual(status, 2)
        self.assertIn("Unsupported output format", err)

    def test_validate(self) -> None:
        status, out, _ = run_cli("validate", self.models_dir)
        self.assertEqual(status, 0)
        self.assertEqual(out.count(": OK"), 2)

    def test_inspect_missing_file(self) -> None:
        status, out, _ = run_cli("inspect", os.path.join(self.temp_dir, "none.xmodel_bin"))
        self.assertEqual(status, 1)
        self.assertIn("File not found", out)


if __name__ == "__main__":
    unittest.main()
