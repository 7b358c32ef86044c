# -*- coding: utf-8 -*-
"""
Export settings
Turns command line arguments (or a plain dict) into one configuration object
"""

from typing import Any, Dict

from .constants import EXT_OBJ


class ExportSettings:
    """Batch export configuration"""

    def __init__(self):
        self.overwrite = True           # replace existing output files
        self.copy_images = False        # copy referenced textures into <output>/_images
        self.new_folder = False         # one subfolder per model, named after it
        self.prefix = ""                # prepended to every output file name
        self.default_extension = EXT_OBJ
        self.write_audit = False        # save audit.log in the output folder
        self.verbose = False

    @classmethod
    def from_args(cls, args):
        """From an argparse namespace; missing attributes keep their defaults"""
        settings = cls()
        for name in vars(settings):
            value = getattr(args, name, None)
            if value is not None:
                setattr(settings, name, value)
        return settings

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        """From a plain dict; unknown keys raise KeyError"""
        settings = cls()
        for key, value in data.items():
            if key not in vars(settings):
                raise KeyError(f"Unknown export setting: {key}")
            setattr(settings, key, value)
        return settings

    def to_dict(self) -> Dict[str, Any]:
        return dict(vars(self))

    def __repr__(self):
        return f"ExportSettings({self.to_dict()!r})"
