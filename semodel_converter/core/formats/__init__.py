# -*- coding: utf-8 -*-
"""
Numeric encodings shared by the writers
"""

from .packed_normal import clamp_float_to_int16, pack_normal
from .quaternion import RotationMatrix, quat_to_euler, quat_to_matrix

__all__ = [
    'clamp_float_to_int16',
    'pack_normal',
    'RotationMatrix',
    'quat_to_euler',
    'quat_to_matrix',
]
