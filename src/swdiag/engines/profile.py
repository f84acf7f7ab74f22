"""Reduction of score matrices to diagonal-offset profiles."""
import numpy as np

from swdiag.utils.resources import jit


# Functions ------------------------------------------------------------------------------------------------------------
def diagonal_sums(matrix: np.ndarray) -> np.ndarray:
    """
    Sums a score matrix along each diagonal on or above the main diagonal.

    Entry ``d`` of the profile is the sum of the cells ``(i, i + d)`` for every row ``i`` where ``i + d`` is still a
    column of the matrix. Peaks in the profile mark the offsets at which the two sequences repeat.

    Args:
        matrix: A 2D score matrix of shape ``(n + 1, m + 1)``.

    Returns:
        An int64 array of length ``m + 1``, one entry per offset, zeros included.

    Examples:
        >>> diagonal_sums(np.array([[0, 0, 0], [0, 5, 1], [0, 2, 10]]))
        array([15,  1,  0])
    """
    matrix = np.asarray(matrix)
    if matrix.ndim != 2: raise ValueError(f'Expected a 2D matrix, got shape {matrix.shape}')
    return _diagonal_sums_kernel(np.ascontiguousarray(matrix, dtype=np.int64))


def dominant_period(profile: np.ndarray, min_offset: int = 1) -> int:
    """
    Returns the offset with the highest summed score.

    Args:
        profile: A diagonal profile as returned by ``diagonal_sums``.
        min_offset: Offsets below this are ignored; the default skips the main diagonal, which always dominates when a
            sequence is compared with itself.

    Returns:
        The best offset (the lowest one on ties), or -1 if the profile has no offset >= ``min_offset``.
    """
    if min_offset < 0: raise ValueError(f'min_offset must be >= 0, got {min_offset}')
    profile = np.asarray(profile)
    if len(profile) <= min_offset: return -1
    return int(np.argmax(profile[min_offset:])) + min_offset


# Kernels --------------------------------------------------------------------------------------------------------------
@jit(nopython=True, cache=True, nogil=True)
def _diagonal_sums_kernel(matrix):
    rows, cols = matrix.shape
    sums = np.zeros(cols, dtype=np.int64)
    for i in range(rows):
        for j in range(i, cols):
            sums[j - i] += matrix[i, j]
    return sums
