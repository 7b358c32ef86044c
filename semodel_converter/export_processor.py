# File: export_processor.py
# Purpose: Conversion entry points
# Notes:
# - convert(): one model, one output file, all-or-nothing write
# - export_model(): convert() plus export options (prefix, sub-folder, overwrite, images)
# - BatchExporter: sequential export of many models, cancel checked between models

import os
import struct
import threading
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .config.export_settings import ExportSettings
from .config.constants import EXT_AUDIT
from .core.errors import ModelParseError, UnsupportedFormatError
from .core.io.semodel_reader import read_semodel
from .core.schema import Model
from .exporters.base_exporter import ExportContext, ModelWriter
from .export_dispatcher import DEFAULT_REGISTRY, ConverterRegistry
from .utils.file_manager import FileManager
from .utils.logger import Logger
from .writers.audit_writer import AuditLogger, ErrorCode

ModelReader = Callable[[str], Model]
ErrorPolicy = Callable[[str, BaseException], bool]
ProgressCallback = Callable[[int, int, "ExportResult"], None]


def convert(format: str,
            input_model_path: str,
            output_path: str,
            *,
            registry: ConverterRegistry = DEFAULT_REGISTRY,
            reader: ModelReader = read_semodel,
            context: Optional[ExportContext] = None,
            logger: Optional[Logger] = None) -> Model:
    """
    Convert one model file

    Args:
        format: output extension (".smd", "xmodel_bin", ...)
        input_model_path: source model, decoded by `reader`
        output_path: destination file, written as given
        context: header metadata; defaults to the two paths and the current time

    Returns:
        the decoded source model, so callers can copy its images without re-reading

    Raises:
        UnsupportedFormatError: unknown format (nothing is read or written)
        IndexError: model violates the input contract (nothing is written)
        OSError: read or write failure
    """
    writer = registry.require(format)
    return write_model(writer, input_model_path, output_path,
                       reader=reader, context=context, logger=logger)


def write_model(writer: ModelWriter,
                input_model_path: str,
                output_path: str,
                *,
                reader: ModelReader = read_semodel,
                context: Optional[ExportContext] = None,
                logger: Optional[Logger] = None) -> Model:
    """convert() with the writer already resolved"""
    model = reader(input_model_path)

    if context is None:
        context = ExportContext(output_path=output_path, source_path=input_model_path)

    data = writer.encode(model, context)
    FileManager.atomic_write(output_path, data)

    if logger:
        logger.info(f"Wrote {output_path} ({len(data)} bytes)", os.path.basename(input_model_path))
    return model


# =========================
# Single model with export options
# =========================

@dataclass
class ExportResult:
    input_path: str
    output_path: str = ""
    written: bool = False
    skipped: bool = False
    error: Optional[BaseException] = None
    missing_images: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None


def output_path_for(input_path: str, output_dir: str, writer: ModelWriter,
                    settings: ExportSettings) -> str:
    """
    <output_dir>[/<name>]/<prefix><name><extension>

    `name` is the source file name without its extension.
    """
    name = FileManager.get_file_name_without_extension(input_path)
    directory = os.path.join(output_dir, name) if settings.new_folder else output_dir
    return os.path.join(directory, f"{settings.prefix}{name}{writer.extension}")


def export_model(input_path: str,
                 output_dir: str,
                 writer: ModelWriter,
                 settings: ExportSettings,
                 *,
                 reader: ModelReader = read_semodel,
                 logger: Optional[Logger] = None) -> ExportResult:
    """
    Export one model with the batch options applied

    An existing output is kept (result.skipped) unless settings.overwrite.
    Errors propagate; BatchExporter decides what to do with them.
    """
    output_path = output_path_for(input_path, output_dir, writer, settings)
    result = ExportResult(input_path=input_path, output_path=output_path)

    if os.path.exists(output_path) and not settings.overwrite:
        result.skipped = True
        if logger:
            logger.warning("Output exists, skipped", output_path, code=ErrorCode.IO002)
        return result

    model = write_model(writer, input_path, output_path, reader=reader, logger=logger)
    result.written = True

    if settings.copy_images:
        result.missing_images = FileManager.copy_images(
            model, os.path.dirname(os.path.abspath(input_path)), os.path.dirname(output_path)
        )
        if logger:
            for image in result.missing_images:
                logger.warning("Image not found", image, code=ErrorCode.MAT003)

    return result


# =========================
# Batch
# =========================

def error_code_for(exc: BaseException) -> str:
    if isinstance(exc, UnsupportedFormatError):
        return ErrorCode.FMT001
    if isinstance(exc, ModelParseError):
        return ErrorCode.FMT002
    if isinstance(exc, (IndexError, struct.error)):
        return ErrorCode.GEO005
    if isinstance(exc, (ArithmeticError, ValueError)):
        return ErrorCode.GEO006
    if isinstance(exc, OSError):
        return ErrorCode.IO001
    return ""


def continue_on_error(path: str, exc: BaseException) -> bool:
    """Default error policy: record the failure and move on"""
    return True


class BatchExporter:
    """
    BatchExporter
    -------------
    Exports a list of models one after another.

    - cancel() is honored between models; the model in progress always finishes
    - on_error(path, exc) -> bool: True continues, False stops the batch
    - on_progress(done, total, result) after every model
    - settings.write_audit saves audit.log in the output folder when the batch ends

    Usage:
        batch = BatchExporter(paths, "out", DEFAULT_REGISTRY.require(".smd"), settings)
        results = batch.run()
    """

    def __init__(self,
                 input_paths: List[str],
                 output_dir: str,
                 writer: ModelWriter,
                 settings: Optional[ExportSettings] = None,
                 *,
                 reader: ModelReader = read_semodel,
                 logger: Optional[Logger] = None,
                 on_error: ErrorPolicy = continue_on_error,
                 on_progress: Optional[ProgressCallback] = None):
        self.input_paths = list(input_paths)
        self.output_dir = output_dir
        self.writer = writer
        self.settings = settings or ExportSettings()
        self.reader = reader
        self.on_error = on_error
        self.on_progress = on_progress

        self.audit_logger: Optional[AuditLogger] = None
        if self.settings.write_audit:
            self.audit_logger = AuditLogger(os.path.join(output_dir, EXT_AUDIT))
        self.logger = logger or Logger(self.audit_logger, verbose=self.settings.verbose)
        if self.logger.audit_logger is None:
            self.logger.audit_logger = self.audit_logger

        self.results: List[ExportResult] = []
        self._cancel = threading.Event()
        self._thread: Optional[threading.Thread] = None

    # ---- control ----
    def cancel(self) -> None:
        self._cancel.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel.is_set()

    def start(self) -> threading.Thread:
        """Run the batch on one worker thread; join() it or poll is_alive()"""
        self._thread = threading.Thread(target=self.run, name="semodel-batch", daemon=True)
        self._thread.start()
        return self._thread

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    # ---- work ----
    def run(self) -> List[ExportResult]:
        total = len(self.input_paths)
        self.logger.info(f"Exporting {total} model(s) as {self.writer.extension}", self.output_dir)
        os.makedirs(self.output_dir, exist_ok=True)

        for done, path in enumerate(self.input_paths, start=1):
            if self._cancel.is_set():
                self.logger.warning(f"Cancelled after {done - 1} of {total} model(s)")
                break

            result = self._export_one(path)
            self.results.append(result)
            if self.on_progress:
                self.on_progress(done, total, result)

            if result.error is not None and not self.on_error(path, result.error):
                self.logger.error("Batch stopped by error policy", path)
                break

        self._finish()
        return self.results

    def _export_one(self, path: str) -> ExportResult:
        try:
            result = export_model(
                path, self.output_dir, self.writer, self.settings,
                reader=self.reader, logger=self.logger,
            )
        except Exception as e:
            self.logger.error(f"Conversion failed: {e}", path, code=error_code_for(e))
            return ExportResult(input_path=path, error=e)
        return result

    def _finish(self) -> None:
        failed = sum(1 for r in self.results if not r.ok)
        skipped = sum(1 for r in self.results if r.skipped)
        written = sum(1 for r in self.results if r.written)
        self.logger.info(f"Done: {written} written, {skipped} skipped, {failed} failed")
        if self.audit_logger is not None:
            self.logger.info(self.audit_logger.get_summary())
            self.audit_logger.save()
