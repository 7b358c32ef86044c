# File: writers/audit_writer.py
# Purpose: Build audit.log, a record of every conversion, warning and failure of a batch
# Notes:
# - Error codes: MAT (materials), UV (texture coordinates), GEO (geometry),
#   IO (filesystem), FMT (output format)
# - Severity: ERROR / WARNING / INFO
# - Line format: [timestamp] [severity] [code] message | Object: name

import time
from dataclasses import dataclass
from typing import List, Optional

from ..config.constants import EXPORT_TIME_FORMAT


@dataclass
class AuditEntry:
    code: str
    message: str
    severity: str
    object_name: Optional[str] = None
    timestamp: str = ""


class AuditLogger:
    """
    AuditLogger
    -----------
    Collects audit entries in memory and saves them as audit.log.

    Usage:
        audit = AuditLogger("out/audit.log")
        audit.info("Converted", "body.semodel")
        audit.error(ErrorCode.MAT001, "Material index 3 out of range", "body.semodel")
        audit.save()
    """

    def __init__(self, filepath: str):
        self.filepath = filepath
        self.entries: List[AuditEntry] = []

    def _add_entry(self, severity: str, message: str,
                   code: str = "", object_name: Optional[str] = None) -> None:
        entry = AuditEntry(
            code=code,
            message=message,
            severity=severity,
            object_name=object_name,
            timestamp=time.strftime(EXPORT_TIME_FORMAT, time.localtime()),
        )
        self.entries.append(entry)

    def info(self, message: str, object_name: Optional[str] = None) -> None:
        self._add_entry("INFO", message, "", object_name)

    def warning(self, code: str, message: str, object_name: Optional[str] = None) -> None:
        self._add_entry("WARNING", message, code, object_name)

    def error(self, code: str, message: str, object_name: Optional[str] = None) -> None:
        self._add_entry("ERROR", message, code, object_name)

    def format_entry(self, entry: AuditEntry) -> str:
        line = f"[{entry.timestamp}] [{entry.severity}]"
        if entry.code:
            line += f" [{entry.code}]"
        line += f" {entry.message}"
        if entry.object_name:
            line += f" | Object: {entry.object_name}"
        return line

    def save(self) -> None:
        """Write audit.log (overwrites)"""
        with open(self.filepath, "w", encoding="utf-8", newline="\n") as f:
            f.write("# semodel-converter Audit Log\n")
            f.write(f"# Generated: {time.strftime(EXPORT_TIME_FORMAT, time.localtime())}\n")
            f.write("# Format: [Timestamp] [Severity] [Code] Message | Object\n")
            f.write("#" + "=" * 70 + "\n\n")
            for entry in self.entries:
                f.write(self.format_entry(entry) + "\n")

    def get_summary(self) -> str:
        error_count = sum(1 for e in self.entries if e.severity == "ERROR")
        warning_count = sum(1 for e in self.entries if e.severity == "WARNING")
        info_count = sum(1 for e in self.entries if e.severity == "INFO")
        return f"Conversion finished: {error_count} error(s), {warning_count} warning(s), {info_count} info"


# ==================== Error codes ====================

class ErrorCode:
    """Audit error codes"""

    # Geometry GEO***
    GEO001 = "GEO001"  # mesh without vertices
    GEO002 = "GEO002"  # face index out of range
    GEO003 = "GEO003"  # weight references a missing bone
    GEO004 = "GEO004"  # bone parent out of range
    GEO005 = "GEO005"  # conversion aborted by an invalid index
    GEO006 = "GEO006"  # non-finite or degenerate value (NaN normal, zero quaternion)

    # UV UV***
    UV003 = "UV003"    # vertex without UV set

    # Materials MAT***
    MAT001 = "MAT001"  # mesh material index out of range
    MAT002 = "MAT002"  # mesh without material reference
    MAT003 = "MAT003"  # referenced image missing on disk

    # Filesystem IO***
    IO001 = "IO001"    # read/write failure
    IO002 = "IO002"    # output exists and overwrite is off

    # Format FMT***
    FMT001 = "FMT001"  # unsupported output format
    FMT002 = "FMT002"  # input is not a valid SEModel
