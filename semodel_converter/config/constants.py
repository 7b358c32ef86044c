# -*- coding: utf-8 -*-
"""
semodel-converter constants
"""

# Units
CM_TO_INCH = 0.3937007874015748

# File extensions
EXT_SEMODEL = ".semodel"
EXT_OBJ = ".obj"
EXT_SMD = ".smd"
EXT_XMODEL_EXPORT = ".xmodel_export"
EXT_XMODEL_BIN = ".xmodel_bin"
EXT_AUDIT = "audit.log"

# Format descriptions (shown by `semodel-convert formats`)
DESC_OBJ = "Wavefront OBJ File"
DESC_SMD = "Studiomdl Data (Valve)"
DESC_XMODEL_EXPORT = "XModel ASCII File (Call of Duty)"
DESC_XMODEL_BIN = "XModel Binary File (Call of Duty)"

# Header comments
EXPORTER_BANNER = "Exported via semodel-converter"
EXPORT_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

# Format versions
SMD_VERSION = 1
XMODEL_EXPORT_VERSION = 6
XMODEL_BIN_VERSION = 7

# XModel objects are synthesized per mesh, the model carries no object names
XMODEL_OBJECT_NAME = "SEModelMesh_{0}"

# XModel material type
XMODEL_EXPORT_MATERIAL_TYPE = "Lambert"
XMODEL_BIN_MATERIAL_TYPE = "lambert"
XMODEL_UV_LAYER = 1

# XModel binary container: "*LZ4*" + u32 uncompressed size + LZ4 block
XMODEL_BIN_MAGIC = b"\x2A\x4C\x5A\x34\x2A"

# Fixed XModel shading parameters (not derived from material data)
MATERIAL_COLOR = (0.0, 0.0, 0.0, 1.0)
MATERIAL_COLOR_BYTES = (255, 255, 255, 255)
MATERIAL_TRANSPARENCY = (0.0, 0.0, 0.0, 1.0)
MATERIAL_AMBIENT_COLOR = (0.0, 0.0, 0.0, 1.0)
MATERIAL_INCANDESCENCE = (0.0, 0.0, 0.0, 1.0)
MATERIAL_COEFFS = (0.8, 0.0)
MATERIAL_GLOW = (0.0, 0)
MATERIAL_REFRACTIVE = (6, 1.0)
MATERIAL_SPECULAR_COLOR = (-1.0, -1.0, -1.0, 1.0)
MATERIAL_REFLECTIVE_COLOR = (-1.0, -1.0, -1.0, 1.0)
MATERIAL_REFLECTIVE = (-1, -1.0)
MATERIAL_BLINN = (-1.0, -1.0)
MATERIAL_PHONG = -1.0

# Export layout
IMAGES_SUBDIR = "_images"

# Image name used when a material carries no simple (diffuse/normal/specular) data
NO_IMAGE = "no_image.png"
