# File: export_dispatcher.py
# Purpose: Converter registry, maps an output extension to its writer
# Notes:
# - One static table of (extension, description, writer), built once
# - Lookup is case-insensitive and the leading dot is optional
# - The registry is immutable after construction; pass it by reference

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from .core.errors import UnsupportedFormatError
from .exporters.base_exporter import ModelWriter
from .writers.obj_writer import ObjWriter
from .writers.smd_writer import SmdWriter
from .writers.xmodel_bin_writer import XModelBinWriter
from .writers.xmodel_export_writer import XModelExportWriter


def normalize_extension(extension: str) -> str:
    """".SMD" / "smd" -> ".smd" """
    extension = extension.strip().lower()
    if not extension.startswith("."):
        extension = "." + extension
    return extension


@dataclass(frozen=True)
class ConverterEntry:
    extension: str
    description: str
    writer: ModelWriter

    def __str__(self):
        return f"{self.description} (*{self.extension})"


class ConverterRegistry:
    """
    ConverterRegistry
    -----------------
    Immutable extension -> writer table.

    Usage:
        registry = build_default_registry()
        writer = registry.require(".xmodel_bin")
        for ext, desc in registry.enumerate(): ...
    """

    def __init__(self, table: Iterable[Tuple[str, str, ModelWriter]] = ()):
        entries: Dict[str, ConverterEntry] = {}
        for extension, description, writer in table:
            key = normalize_extension(extension)
            if key in entries:
                raise ValueError(f"Duplicate converter extension: {key}")
            entries[key] = ConverterEntry(key, description, writer)
        self._entries = entries

    def register(self, extension: str, description: str,
                 writer: ModelWriter) -> "ConverterRegistry":
        """New registry with one more entry; this one is left unchanged"""
        table = [(e.extension, e.description, e.writer) for e in self._entries.values()]
        table.append((extension, description, writer))
        return ConverterRegistry(table)

    def lookup(self, extension: str) -> Optional[ModelWriter]:
        """Writer for `extension`, or None"""
        entry = self._entries.get(normalize_extension(extension))
        return entry.writer if entry else None

    def require(self, extension: str) -> ModelWriter:
        """Writer for `extension`; raises UnsupportedFormatError if unknown"""
        writer = self.lookup(extension)
        if writer is None:
            raise UnsupportedFormatError(extension)
        return writer

    def enumerate(self) -> List[Tuple[str, str]]:
        """(extension, description) pairs in registration order"""
        return [(e.extension, e.description) for e in self._entries.values()]

    def filter_string(self, default_extension: Optional[str] = None) -> str:
        """
        File dialog filter, e.g. "Wavefront OBJ File (*.obj)|*.obj|...",
        with the default extension's entry first
        """
        default_key = normalize_extension(default_extension) if default_extension else None
        parts: List[str] = []
        for entry in self._entries.values():
            part = f"{entry}|*{entry.extension}"
            if entry.extension == default_key:
                parts.insert(0, part)
            else:
                parts.append(part)
        return "|".join(parts)

    def __contains__(self, extension: str) -> bool:
        return self.lookup(extension) is not None

    def __len__(self) -> int:
        return len(self._entries)


def _writer_entry(writer: ModelWriter) -> Tuple[str, str, ModelWriter]:
    return (writer.extension, writer.description, writer)


def build_default_registry() -> ConverterRegistry:
    """Registry with every supported output format"""
    return ConverterRegistry([
        _writer_entry(ObjWriter()),
        _writer_entry(SmdWriter()),
        _writer_entry(XModelExportWriter()),
        _writer_entry(XModelBinWriter()),
    ])


DEFAULT_REGISTRY = build_default_registry()
