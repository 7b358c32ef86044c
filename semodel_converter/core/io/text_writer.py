# File: core/io/text_writer.py
# Purpose: Line-oriented text buffer shared by the ASCII writers (OBJ / SMD / XModel export)
# Notes:
# - Output is assembled in memory and returned as bytes; the caller decides where it goes
# - Line endings are "\n", encoding UTF-8 without BOM
# - Fixed-point fields use 6 decimals ("%.6f"), general fields use 15 significant
#   digits with trailing zeros dropped ("G15")

import math
from typing import List


def format_fixed(value: float) -> str:
    """6-decimal fixed point, e.g. 1 -> "1.000000" """
    return f"{value:.6f}"


def format_general(value: float) -> str:
    """
    General format with 15 significant digits ("G15")

    Exponents use at least two digits with an explicit sign.

    Examples:
        1.0                  -> "1"
        0.5                  -> "0.5"
        0.10000000149011612  -> "0.100000001490116"
        0.00001              -> "1E-05"
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0.0:
        return "0"
    return f"{value:.15G}"


class TextWriter:
    """
    TextWriter
    ----------
    Collects output lines for one conversion.

    Usage:
        tw = TextWriter()
        tw.line("version 1")
        tw.comment("// ", "Exported via semodel-converter")
        data = tw.to_bytes()
    """

    def __init__(self):
        self._lines: List[str] = []

    def line(self, text: str = "") -> None:
        self._lines.append(text)

    def fields(self, *values) -> None:
        """Write one line of space separated values"""
        self._lines.append(" ".join(str(v) for v in values))

    def comment(self, prefix: str, text: str) -> None:
        self._lines.append(f"{prefix}{text}")

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def getvalue(self) -> str:
        if not self._lines:
            return ""
        return "\n".join(self._lines) + "\n"

    def to_bytes(self) -> bytes:
        return self.getvalue().encode("utf-8")
