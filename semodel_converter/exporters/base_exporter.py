# -*- coding: utf-8 -*-
"""
Writer capability shared by every output format

A writer turns a Model into the bytes of one output file. It never touches
the filesystem itself; export_processor writes the bytes atomically.
"""

import time
from dataclasses import dataclass, field
from typing import List, Protocol, runtime_checkable

from ..config.constants import EXPORT_TIME_FORMAT, EXPORTER_BANNER
from ..core.schema import Model


@dataclass
class ExportContext:
    """
    Per-call metadata written into file headers

    Attributes:
        output_path: path of the file being produced
        source_path: path of the source model
        export_time: timestamp string; defaults to the local time of creation
    """
    output_path: str = ""
    source_path: str = ""
    export_time: str = field(
        default_factory=lambda: time.strftime(EXPORT_TIME_FORMAT, time.localtime())
    )

    def header_comments(self) -> List[str]:
        """Comment lines shared by the SMD and XModel writers"""
        return [
            EXPORTER_BANNER,
            f"Export filename: {self.output_path}",
            f"Source filename: {self.source_path}",
            f"Export time: {self.export_time}",
        ]


@runtime_checkable
class ModelWriter(Protocol):
    """
    Output format writer

    Implementations: ObjWriter, SmdWriter, XModelExportWriter, XModelBinWriter.
    """
    extension: str
    description: str

    def encode(self, model: Model, context: ExportContext) -> bytes:
        """Serialize `model`; input contract violations raise (IndexError etc.)"""
        ...
