# -*- coding: utf-8 -*-
"""
Quaternion helpers

Quaternions are (x, y, z, w) tuples, the layout used by the SEModel format.
"""

import math
from dataclasses import dataclass
from typing import Tuple


@dataclass
class RotationMatrix:
    """
    3x3 rotation matrix stored as three row vectors X, Y, Z.

    XModel writers emit the columns of this matrix (X.X, Y.X, Z.X ...) as
    their "X", "Y" and "Z" axis rows.
    """
    x: Tuple[float, float, float]
    y: Tuple[float, float, float]
    z: Tuple[float, float, float]

    def column(self, axis: int) -> Tuple[float, float, float]:
        return (self.x[axis], self.y[axis], self.z[axis])

    def rows(self) -> Tuple[Tuple[float, float, float], ...]:
        return (self.x, self.y, self.z)


def quat_to_euler(quaternion):
    """
    Quaternion -> intrinsic XYZ euler angles (radians)

    The asin argument is clamped to [-1, 1]; accumulated float drift on
    near-gimbal rotations would otherwise leave its domain.

    Args:
        quaternion: (x, y, z, w)

    Returns:
        (rx, ry, rz)
    """
    x, y, z, w = quaternion

    t0 = 2.0 * (w * x + y * z)
    t1 = 1.0 - 2.0 * (x * x + y * y)
    rx = math.atan2(t0, t1)

    t2 = 2.0 * (w * y - z * x)
    t2 = max(-1.0, min(1.0, t2))
    ry = math.asin(t2)

    t3 = 2.0 * (w * z + x * y)
    t4 = 1.0 - 2.0 * (y * y + z * z)
    rz = math.atan2(t3, t4)

    return (rx, ry, rz)


def quat_to_matrix(quaternion) -> RotationMatrix:
    """
    Quaternion -> 3x3 rotation matrix

    Every term is scaled by 1 / (x² + y² + z² + w²), so non-unit input still
    yields an orthonormal matrix.
    """
    x, y, z, w = quaternion

    x2 = x * x
    y2 = y * y
    z2 = z * z
    w2 = w * w

    inverse = 1.0 / (x2 + y2 + z2 + w2)

    xx = (x2 - y2 - z2 + w2) * inverse
    yy = (-x2 + y2 - z2 + w2) * inverse
    zz = (-x2 - y2 + z2 + w2) * inverse

    xy = x * y
    zw = z * w
    yx = 2.0 * (xy + zw) * inverse
    xy_ = 2.0 * (xy - zw) * inverse

    xz = x * z
    yw = y * w
    zx = 2.0 * (xz - yw) * inverse
    xz_ = 2.0 * (xz + yw) * inverse

    yz = y * z
    xw = x * w
    zy = 2.0 * (yz + xw) * inverse
    yz_ = 2.0 * (yz - xw) * inverse

    return RotationMatrix(
        x=(xx, xy_, xz_),
        y=(yx, yy, yz_),
        z=(zx, zy, zz),
    )
