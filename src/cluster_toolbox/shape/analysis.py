"""Profile shape comparison primitives.

Every function here is pure and safe to call from any thread. The numeric
loops are compiled with numba on first use.
"""

import numpy as np
from numba import njit
from numpy.typing import ArrayLike, NDArray

from cluster_toolbox.errors import DimensionMismatchError, OutOfRangeError


@njit
def _triangular_kernel(length: int, peak_index: int) -> np.ndarray:
    out = np.empty(length, dtype=np.float64)
    rise = peak_index + 1.0
    fall = float(length - peak_index)
    for i in range(length):
        if i <= peak_index:
            out[i] = (i + 1.0) / rise
        else:
            out[i] = (length - i) / fall
    return out / out.sum()


@njit
def _cosine_kernel(a: np.ndarray, b: np.ndarray) -> float:
    dot = 0.0
    norm_a = 0.0
    norm_b = 0.0
    for i in range(a.size):
        dot += a[i] * b[i]
        norm_a += a[i] * a[i]
        norm_b += b[i] * b[i]

    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0

    similarity = dot / np.sqrt(norm_a * norm_b)
    if np.isnan(similarity):
        return similarity
    return min(1.0, max(-1.0, similarity))


@njit
def _euclidean_kernel(a: np.ndarray, b: np.ndarray) -> float:
    total = 0.0
    for i in range(a.size):
        diff = a[i] - b[i]
        total += diff * diff
    return np.sqrt(total)


def _as_vector(values: ArrayLike) -> NDArray[np.float64]:
    return np.ascontiguousarray(values, dtype=np.float64).reshape(-1)


def _as_pair(
    a: ArrayLike, b: ArrayLike
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    vec_a = _as_vector(a)
    vec_b = _as_vector(b)
    if vec_a.size != vec_b.size:
        raise DimensionMismatchError(vec_a.size, vec_b.size)
    return vec_a, vec_b


def triangular_distribution(length: int, peak_index: int) -> NDArray[np.float64]:
    """Return a triangular reference profile of ``length`` values summing to 1.

    Values ramp linearly up to ``peak_index`` and back down afterwards, so
    ``peak_index=0`` gives a falling ramp and ``peak_index=length - 1`` a
    rising one. Every value is strictly positive.

    Args:
        length: Number of levels in the profile. Anything up to 1 yields ``[1.0]``.
        peak_index: Position of the maximum, in ``[0, length - 1]``.

    Raises:
        OutOfRangeError: If ``peak_index`` lies outside ``[0, length - 1]``.

    """
    if length <= 1:
        return np.ones(1, dtype=np.float64)

    if not 0 <= peak_index < length:
        raise OutOfRangeError(
            f"Invalid peak_index; expected within [0, {length - 1}] but got {peak_index}"
        )

    return _triangular_kernel(int(length), int(peak_index))


def cosine_similarity(a: ArrayLike, b: ArrayLike) -> float:
    """Cosine of the angle between two equal-length vectors.

    Returns 0.0 when either vector is all zeros and NaN when either holds a NaN.

    Raises:
        DimensionMismatchError: If the lengths differ.

    """
    vec_a, vec_b = _as_pair(a, b)
    return float(_cosine_kernel(vec_a, vec_b))


def euclidean_distance(a: ArrayLike, b: ArrayLike) -> float:
    """Euclidean distance between two equal-length vectors.

    Raises:
        DimensionMismatchError: If the lengths differ.

    """
    vec_a, vec_b = _as_pair(a, b)
    return float(_euclidean_kernel(vec_a, vec_b))


def normalize(values: ArrayLike) -> NDArray[np.float64]:
    """Scale ``values`` to sum to 1, or return zeros if they sum to 0."""
    vec = _as_vector(values)
    total = vec.sum()
    if total == 0.0:
        return np.zeros_like(vec)
    return vec / total
