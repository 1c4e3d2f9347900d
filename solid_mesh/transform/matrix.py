"""
4x4 matrix algebra for placing meshes.

Matrices are flat float32 arrays of 16 values in column-major order:
element (row, col) lives at index col*4 + row, so indices 12..14 hold the
translation. Every function returns a new array and leaves its arguments
untouched. Arithmetic is carried out in float64 and rounded to float32 on
return.

translate / rotate_* / scale compose onto the existing matrix: they act in
the frame defined by the matrix's current basis columns (local frame), the
same as right-multiplying by the elementary transform.
"""

import logging
import math
from typing import Optional, Sequence, Union

import numpy as np
from numpy.typing import NDArray

logger = logging.getLogger(__name__)

Matrix4 = NDArray[np.float32]
MatrixLike = Union[Sequence[float], NDArray]


def _as_mat4(m: MatrixLike, name: str = "matrix") -> NDArray[np.float64]:
    arr = np.array(m, dtype=np.float64).reshape(-1)
    if arr.size != 16:
        raise ValueError(f"{name} must have 16 elements, got {arr.size}")
    return arr


def _vec3(v: Sequence[float], name: str) -> NDArray[np.float64]:
    arr = np.array(v, dtype=np.float64).reshape(-1)
    if arr.size != 3:
        raise ValueError(f"{name} must have 3 components, got {arr.size}")
    return arr


def _result(values: NDArray[np.float64]) -> Matrix4:
    return values.astype(np.float32)


def identity() -> Matrix4:
    """The 4x4 identity."""
    return np.eye(4, dtype=np.float32).reshape(-1)


def translate(matrix: MatrixLike, translation: Sequence[float]) -> Matrix4:
    """Translate in the frame of matrix.

    The translation column becomes
    col0*tx + col1*ty + col2*tz + col3, for all four rows.

    Args:
        matrix: Column-major 4x4 matrix
        translation: (tx, ty, tz)

    Returns:
        New column-major matrix
    """
    m = _as_mat4(matrix)
    tx, ty, tz = _vec3(translation, "translation")
    result = m.copy()
    for row in range(4):
        result[12 + row] = m[row] * tx + m[4 + row] * ty + m[8 + row] * tz + m[12 + row]
    return _result(result)


def rotate_x(matrix: MatrixLike, angle: float) -> Matrix4:
    """Rotate about the local X axis by angle (radians).

    col1' = col1*cos + col2*sin
    col2' = col2*cos - col1*sin
    """
    m = _as_mat4(matrix)
    c = math.cos(angle)
    s = math.sin(angle)
    col1 = m[4:8].copy()
    col2 = m[8:12].copy()

    result = m.copy()
    result[4:8] = col1 * c + col2 * s
    result[8:12] = col2 * c - col1 * s
    return _result(result)


def rotate_y(matrix: MatrixLike, angle: float) -> Matrix4:
    """Rotate about the local Y axis by angle (radians).

    col0' = col0*cos - col2*sin
    col2' = col0*sin + col2*cos

    rotate_y(identity(), pi/2) maps (1, 0, 0) to (0, 0, -1).
    """
    m = _as_mat4(matrix)
    c = math.cos(angle)
    s = math.sin(angle)
    col0 = m[0:4].copy()
    col2 = m[8:12].copy()

    result = m.copy()
    result[0:4] = col0 * c - col2 * s
    result[8:12] = col0 * s + col2 * c
    return _result(result)


def rotate_z(matrix: MatrixLike, angle: float) -> Matrix4:
    """Rotate about the local Z axis by angle (radians).

    col0' = col0*cos + col1*sin
    col1' = col1*cos - col0*sin
    """
    m = _as_mat4(matrix)
    c = math.cos(angle)
    s = math.sin(angle)
    col0 = m[0:4].copy()
    col1 = m[4:8].copy()

    result = m.copy()
    result[0:4] = col0 * c + col1 * s
    result[4:8] = col1 * c - col0 * s
    return _result(result)


def scale(matrix: MatrixLike, factors: Sequence[float]) -> Matrix4:
    """Scale the three basis columns by (sx, sy, sz); translation untouched."""
    m = _as_mat4(matrix)
    sx, sy, sz = _vec3(factors, "factors")
    result = m.copy()
    result[0:4] *= sx
    result[4:8] *= sy
    result[8:12] *= sz
    return _result(result)


def multiply(a: MatrixLike, b: MatrixLike) -> Matrix4:
    """Column-major product a * b.

    result[col*4 + row] = sum_k a[k*4 + row] * b[col*4 + k]
    """
    a = _as_mat4(a, "a")
    b = _as_mat4(b, "b")
    result = np.zeros(16, dtype=np.float64)
    for row in range(4):
        for col in range(4):
            total = 0.0
            for k in range(4):
                total += a[k * 4 + row] * b[col * 4 + k]
            result[col * 4 + row] = total
    return _result(result)


def transpose(matrix: MatrixLike) -> Matrix4:
    m = _as_mat4(matrix)
    return _result(m.reshape(4, 4).T.reshape(-1))


def inverse(matrix: MatrixLike) -> Optional[Matrix4]:
    """Invert via 2x2 sub-determinant (cofactor) expansion.

    The twelve sub-determinants b00..b11 pair up rows of the upper two and
    lower two column pairs; together they give the determinant and the
    adjugate.

    Args:
        matrix: Column-major 4x4 matrix

    Returns:
        New inverse matrix, or None when the determinant is zero, NaN or
        infinite
    """
    m = _as_mat4(matrix)
    a00, a01, a02, a03 = m[0:4]
    a10, a11, a12, a13 = m[4:8]
    a20, a21, a22, a23 = m[8:12]
    a30, a31, a32, a33 = m[12:16]

    b00 = a00 * a11 - a01 * a10
    b01 = a00 * a12 - a02 * a10
    b02 = a00 * a13 - a03 * a10
    b03 = a01 * a12 - a02 * a11
    b04 = a01 * a13 - a03 * a11
    b05 = a02 * a13 - a03 * a12
    b06 = a20 * a31 - a21 * a30
    b07 = a20 * a32 - a22 * a30
    b08 = a20 * a33 - a23 * a30
    b09 = a21 * a32 - a22 * a31
    b10 = a21 * a33 - a23 * a31
    b11 = a22 * a33 - a23 * a32

    det = b00 * b11 - b01 * b10 + b02 * b09 + b03 * b08 - b04 * b07 + b05 * b06
    if det == 0 or not math.isfinite(det):
        logger.debug("Matrix is singular or non-finite (det=%r); no inverse", det)
        return None
    inv_det = 1.0 / det

    result = np.array([
        a11 * b11 - a12 * b10 + a13 * b09,
        a02 * b10 - a01 * b11 - a03 * b09,
        a31 * b05 - a32 * b04 + a33 * b03,
        a22 * b04 - a21 * b05 - a23 * b03,
        a12 * b08 - a10 * b11 - a13 * b07,
        a00 * b11 - a02 * b08 + a03 * b07,
        a32 * b02 - a30 * b05 - a33 * b01,
        a20 * b05 - a22 * b02 + a23 * b01,
        a10 * b10 - a11 * b08 + a13 * b06,
        a01 * b08 - a00 * b10 - a03 * b06,
        a30 * b04 - a31 * b02 + a33 * b00,
        a21 * b02 - a20 * b04 - a23 * b00,
        a11 * b07 - a10 * b09 - a12 * b06,
        a00 * b09 - a01 * b07 + a02 * b06,
        a31 * b01 - a30 * b03 - a32 * b00,
        a20 * b03 - a21 * b01 + a22 * b00,
    ], dtype=np.float64) * inv_det
    return _result(result)


def inverse_transpose(matrix: MatrixLike) -> Optional[Matrix4]:
    """Transpose of the inverse (the normal matrix); None if singular."""
    inv = inverse(matrix)
    if inv is None:
        return None
    return transpose(inv)


def normal_matrix(matrix: MatrixLike) -> Optional[NDArray[np.float32]]:
    """Upper-left 3x3 of inverse_transpose, flat column-major (9 values)."""
    it = inverse_transpose(matrix)
    if it is None:
        return None
    return it.reshape(4, 4)[:3, :3].reshape(-1).copy()


def apply(matrix: MatrixLike, vector: Sequence[float]) -> NDArray[np.float64]:
    """Multiply matrix by a 4-component column vector."""
    m = _as_mat4(matrix)
    v = np.array(vector, dtype=np.float64).reshape(-1)
    if v.size != 4:
        raise ValueError(f"vector must have 4 components, got {v.size}")
    return m.reshape(4, 4).T @ v


def transform_point(matrix: MatrixLike, point: Sequence[float]) -> NDArray[np.float64]:
    """Transform a 3D point (w = 1), dividing by the resulting w when non-zero."""
    x, y, z = _vec3(point, "point")
    out = apply(matrix, (x, y, z, 1.0))
    if out[3] != 0:
        return out[:3] / out[3]
    return out[:3]
