# File: __init__.py
# Purpose: semodel-converter package entry
# Notes:
# - convert(): one SEModel file to one output file
# - DEFAULT_REGISTRY: supported output formats by extension
# - BatchExporter: sequential multi-model export with cancellation

__version__ = "1.0.0"

from .core.errors import (
    ChunkError,
    ContainerError,
    ConversionError,
    ModelParseError,
    UnsupportedFormatError,
)
from .core.io.semodel_reader import parse_semodel, read_semodel
from .core.schema import (
    Bone,
    BoneWeight,
    Face,
    Material,
    Mesh,
    Model,
    SimpleMaterial,
    Vertex,
)
from .core.validator import validate_model
from .config.export_settings import ExportSettings
from .exporters.base_exporter import ExportContext, ModelWriter
from .export_dispatcher import DEFAULT_REGISTRY, ConverterRegistry, build_default_registry
from .export_processor import BatchExporter, ExportResult, convert, export_model

__all__ = [
    '__version__',
    'ChunkError',
    'ContainerError',
    'ConversionError',
    'ModelParseError',
    'UnsupportedFormatError',
    'parse_semodel',
    'read_semodel',
    'Bone',
    'BoneWeight',
    'Face',
    'Material',
    'Mesh',
    'Model',
    'SimpleMaterial',
    'Vertex',
    'validate_model',
    'ExportSettings',
    'ExportContext',
    'ModelWriter',
    'DEFAULT_REGISTRY',
    'ConverterRegistry',
    'build_default_registry',
    'BatchExporter',
    'ExportResult',
    'convert',
    'export_model',
]
