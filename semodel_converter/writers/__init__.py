# File: writers/__init__.py
# Purpose: Output format writers

"""
semodel-converter writers
One writer per output format, plus the audit log writer
"""

from .audit_writer import AuditEntry, AuditLogger, ErrorCode
from .obj_writer import ObjWriter
from .smd_writer import SmdWriter
from .xmodel_bin_writer import XModelBinWriter
from .xmodel_export_writer import XModelExportWriter

__all__ = [
    'AuditEntry',
    'AuditLogger',
    'ErrorCode',
    'ObjWriter',
    'SmdWriter',
    'XModelExportWriter',
    'XModelBinWriter',
]
