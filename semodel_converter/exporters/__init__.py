# -*- coding: utf-8 -*-
"""
Writer capability and per-call export context
"""

from .base_exporter import ExportContext, ModelWriter

__all__ = [
    'ExportContext',
    'ModelWriter',
]
