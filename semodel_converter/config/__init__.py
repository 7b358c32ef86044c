# -*- coding: utf-8 -*-
"""Configuration"""

from .constants import *
from .export_settings import ExportSettings

__all__ = [
    'ExportSettings',
]
