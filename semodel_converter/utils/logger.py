# File: utils/logger.py
# Purpose: Unified console logging, optionally forwarded to AuditLogger
# Summary:
# - Logger: info / warning / error, timestamped lines
# - Optional AuditLogger binding writes the same messages to audit.log
# - Used by export_processor and the command line

import sys
import time
from typing import Optional, TYPE_CHECKING

from ..config.constants import EXPORT_TIME_FORMAT

# avoid circular import
if TYPE_CHECKING:
    from ..writers.audit_writer import AuditLogger


class Logger:
    """
    Logger
    ------
    Unified logging interface.
    - Levels: INFO / WARNING / ERROR
    - Console output (ERROR to stderr, the rest to stdout)
    - Optional AuditLogger binding; `code` is passed through as the audit error code
    """

    def __init__(self, audit_logger: Optional["AuditLogger"] = None, verbose: bool = True):
        self.audit_logger = audit_logger
        self.verbose = verbose

    def _log(self, level: str, message: str, context: Optional[str] = None,
             code: str = "") -> None:
        ts = time.strftime(EXPORT_TIME_FORMAT, time.localtime())
        line = f"[{ts}] [{level}] {message}"
        if context:
            line += f" | Context: {context}"

        # errors always reach the console, the rest only when verbose
        if level == "ERROR":
            print(line, file=sys.stderr)
        elif self.verbose:
            print(line, file=sys.stdout)

        if self.audit_logger:
            if level == "INFO":
                self.audit_logger.info(message, context)
            elif level == "WARNING":
                self.audit_logger.warning(code, message, context)
            elif level == "ERROR":
                self.audit_logger.error(code, message, context)

    def info(self, message: str, context: Optional[str] = None) -> None:
        self._log("INFO", message, context)

    def warning(self, message: str, context: Optional[str] = None, code: str = "") -> None:
        self._log("WARNING", message, context, code)

    def error(self, message: str, context: Optional[str] = None, code: str = "") -> None:
        self._log("ERROR", message, context, code)
