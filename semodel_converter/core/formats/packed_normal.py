# -*- coding: utf-8 -*-
"""
Int16 packing for XModel binary matrices and normals

Lossy: only the binary XModel writer may use these.
"""

INT16_MIN = -32768
INT16_MAX = 32767


def clamp_float_to_int16(value):
    """
    Scale a [-1, 1] float to int16

    round(32767 * value) clamped to [-32768, 32767]
    """
    scaled = round(INT16_MAX * value)
    return max(INT16_MIN, min(INT16_MAX, scaled))


def pack_normal(nx, ny, nz):
    """
    Pack a normal (or matrix row) as three int16 values

    The input is not normalized first; XModel binary stores normals as the
    source provides them.

    Returns:
        (ix, iy, iz)
    """
    return (
        clamp_float_to_int16(nx),
        clamp_float_to_int16(ny),
        clamp_float_to_int16(nz),
    )
