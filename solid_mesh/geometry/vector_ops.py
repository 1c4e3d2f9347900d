"""
3-component vector helpers used for normal computation.

Both functions return fresh float64 arrays and never modify their inputs.
"""

from typing import Sequence, Union

import numpy as np
from numpy.typing import NDArray

VectorLike = Union[Sequence[float], NDArray[np.floating]]


def _as_vec3(v: VectorLike, name: str) -> NDArray[np.float64]:
    arr = np.array(v, dtype=np.float64)
    if arr.shape != (3,):
        raise ValueError(f"{name} must have 3 components, got shape {arr.shape}")
    return arr


def cross(a: VectorLike, b: VectorLike) -> NDArray[np.float64]:
    """Right-hand-rule cross product a x b.

    Parallel (or zero) inputs yield the zero vector.
    """
    a = _as_vec3(a, "a")
    b = _as_vec3(b, "b")
    return np.array([
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    ])


def normalize(v: VectorLike) -> NDArray[np.float64]:
    """Return v scaled to unit length.

    A zero-length vector maps to the zero vector instead of dividing by zero.

    Args:
        v: 3-component vector

    Returns:
        Unit vector, or (0, 0, 0) when |v| == 0
    """
    v = _as_vec3(v, "v")
    length = float(np.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2]))
    if length > 0:
        return v / length
    return np.zeros(3)
