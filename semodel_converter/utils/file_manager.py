# File: utils/file_manager.py
# Purpose: Filesystem operations shared by every output format
# Notes:
# - Directory creation
# - All-or-nothing writes (temporary file + os.replace)
# - Model discovery and texture copying for batch exports

import os
import shutil
import tempfile
from pathlib import Path
from typing import Iterable, List

from ..config.constants import EXT_SEMODEL, IMAGES_SUBDIR
from ..core.schema import Model


class FileManager:
    """
    File manager

    Single file-operation interface used by export_processor and the CLI.
    """

    @staticmethod
    def ensure_directory(file_path: str) -> None:
        """
        Make sure the parent directory of `file_path` exists
        """
        directory = os.path.dirname(file_path)
        if directory and not os.path.exists(directory):
            os.makedirs(directory, exist_ok=True)

    @staticmethod
    def atomic_write(file_path: str, data: bytes) -> None:
        """
        Write `data` to `file_path` atomically.

        The bytes go to a temporary file in the target directory, which is
        renamed over the destination once complete. On failure the temporary
        file is removed and the exception propagates; the destination is
        never left partially written.
        """
        FileManager.ensure_directory(file_path)
        directory = os.path.dirname(os.path.abspath(file_path))
        fd, temp_path = tempfile.mkstemp(
            prefix=".{0}.".format(os.path.basename(file_path)), suffix=".tmp", dir=directory
        )
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(temp_path, file_path)
        except BaseException:
            if os.path.exists(temp_path):
                os.remove(temp_path)
            raise

    @staticmethod
    def get_file_name_without_extension(file_path: str) -> str:
        return os.path.splitext(os.path.basename(file_path))[0]

    @staticmethod
    def collect_models(paths: Iterable[str]) -> List[str]:
        """
        Expand input paths into .semodel files.

        Files are kept as given (in order); directories are walked
        recursively, files of a folder before its subfolders, names sorted.
        """
        found: List[str] = []
        for path in paths:
            if os.path.isdir(path):
                for root, dirs, files in os.walk(path):
                    dirs.sort()
                    for name in sorted(files):
                        if os.path.splitext(name)[1].lower() == EXT_SEMODEL:
                            found.append(os.path.join(root, name))
            else:
                found.append(path)
        return found

    @staticmethod
    def copy_images(model: Model, input_directory: str, output_directory: str) -> List[str]:
        """
        Copy every image referenced by simple materials into <output>/_images.

        Images are resolved relative to the source model's folder; missing
        ones are skipped. Existing copies are overwritten.

        Returns:
            list of source images that were not found
        """
        images_dir = os.path.join(output_directory, IMAGES_SUBDIR)
        os.makedirs(images_dir, exist_ok=True)

        missing: List[str] = []
        for material in model.materials:
            if material.data is None:
                continue
            for image in material.data.image_names():
                if not image:
                    continue
                source = os.path.join(input_directory, image)
                if os.path.isfile(source):
                    shutil.copyfile(source, os.path.join(images_dir, Path(source).name))
                else:
                    missing.append(source)
        return missing
