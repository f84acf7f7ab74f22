"""
Local-alignment score matrix fills with constant and affine gap costs.

Both fills are Smith-Waterman style: every cell is floored at 0 so an alignment may start anywhere, and only the scores
are kept (no traceback pointers). Matrices have shape ``(n + 1, m + 1)`` with row 0 and column 0 left at 0.
"""
from dataclasses import dataclass
from enum import IntEnum
from typing import Union, Iterable, Callable

import numpy as np

from swdiag.engines.scoring import ScoreMatrix
from swdiag.utils.resources import jit


# Constants ------------------------------------------------------------------------------------------------------------
class GapModel(IntEnum):
    """Gap cost model used to fill the score matrix."""
    CONSTANT = 0
    AFFINE = 1


_SCORE_DTYPE = np.int64
_REGISTRY: dict[GapModel, Callable] = {}


# Classes --------------------------------------------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class AffineMatrices:
    """
    The three coupled matrices of the affine-gap fill.

    Attributes:
        match: Best score ending in a substitution. After the fill each cell holds the maximum over all three states,
            so this is also the composite matrix reported downstream.
        gap_a: Best score ending in a gap in sequence A (a column consumed without a row).
        gap_b: Best score ending in a gap in sequence B (a row consumed without a column).
    """
    match: np.ndarray
    gap_a: np.ndarray
    gap_b: np.ndarray

    def __iter__(self): return iter((self.match, self.gap_a, self.gap_b))

    @property
    def composite(self) -> np.ndarray:
        return self.match

    @property
    def shape(self) -> tuple[int, int]:
        return self.match.shape


# Functions ------------------------------------------------------------------------------------------------------------
def register(model: GapModel):
    """Registers the fill used for a gap model by ``fill``."""
    def decorator(func):
        _REGISTRY[model] = func
        return func
    return decorator


def constant_matrix(a: Union[np.ndarray, Iterable[int]], b: Union[np.ndarray, Iterable[int]], table: ScoreMatrix,
                    penalty: int = 25, exclude_diagonal: bool = False) -> np.ndarray:
    """
    Fills a local-alignment matrix with a flat per-symbol gap penalty.

    Each cell is ``max(0, H[i-1, j-1] + s(a_i, b_j), H[i-1, j] - p, H[i, j-1] - p)``.

    Args:
        a: Encoded first sequence (length n), indexing the rows.
        b: Encoded second sequence (length m), indexing the columns.
        table: Substitution scores indexed by encoded symbols.
        penalty: Cost of every gap position, must be >= 0.
        exclude_diagonal: Force cells ``(i, i)`` to 0 regardless of sequence content.

    Returns:
        A read-only ``(n + 1, m + 1)`` int64 array.

    Examples:
        >>> from swdiag.core.alphabet import Alphabet
        >>> a = b = Alphabet.DNA_N.encode(b'ACGT')
        >>> H = constant_matrix(a, b, ScoreMatrix.nucleotide())
        >>> H.diagonal()
        array([ 0,  5, 10, 15, 20])
    """
    if penalty < 0: raise ValueError(f'Gap penalty must be >= 0, got {penalty}')
    scores = _as_table(table)
    H = _constant_kernel(_as_codes(a, scores), _as_codes(b, scores), scores, int(penalty), bool(exclude_diagonal))
    H.flags.writeable = False
    return H


def affine_matrices(a: Union[np.ndarray, Iterable[int]], b: Union[np.ndarray, Iterable[int]], table: ScoreMatrix,
                    gap_open: int = 25, gap_extend: int = 1, exclude_diagonal: bool = False) -> AffineMatrices:
    """
    Fills the three-state (Gotoh) local-alignment matrices.

    Opening a gap costs ``gap_open + gap_extend``, extending a gap of the same orientation costs ``gap_extend`` and
    switching orientation counts as a new open. All three states of a cell are computed together before moving on,
    then the match state is overwritten with the best of the three.

    Args:
        a: Encoded first sequence (length n), indexing the rows.
        b: Encoded second sequence (length m), indexing the columns.
        table: Substitution scores indexed by encoded symbols.
        gap_open: One-off cost of opening a gap, must be >= 0.
        gap_extend: Per-position cost of a gap, must be >= 0.
        exclude_diagonal: Force cells ``(i, i)`` to 0 in all three matrices.

    Returns:
        An ``AffineMatrices`` of read-only ``(n + 1, m + 1)`` int64 arrays.
    """
    if gap_open < 0: raise ValueError(f'Gap open penalty must be >= 0, got {gap_open}')
    if gap_extend < 0: raise ValueError(f'Gap extend penalty must be >= 0, got {gap_extend}')
    scores = _as_table(table)
    matrices = AffineMatrices(*_affine_kernel(_as_codes(a, scores), _as_codes(b, scores), scores,
                                              int(gap_open), int(gap_extend), bool(exclude_diagonal)))
    for matrix in matrices: matrix.flags.writeable = False
    return matrices


def fill(model: Union[str, GapModel], a, b, table: ScoreMatrix, penalty: int = 25, gap_open: int = 25,
         gap_extend: int = 1, exclude_diagonal: bool = False) -> np.ndarray:
    """
    Fills the score matrix for a gap model and returns the externally visible (composite) matrix.

    ``penalty`` is used by the constant model, ``gap_open`` and ``gap_extend`` by the affine model.

    Examples:
        >>> from swdiag.core.alphabet import Alphabet
        >>> a = b = Alphabet.DNA_N.encode(b'ACGT')
        >>> fill('affine', a, b, ScoreMatrix.nucleotide(), gap_open=25, gap_extend=1).shape
        (5, 5)
    """
    model = GapModel[model.upper()] if isinstance(model, str) else GapModel(model)
    return _REGISTRY[model](a, b, table, penalty=penalty, gap_open=gap_open, gap_extend=gap_extend,
                            exclude_diagonal=exclude_diagonal)


@register(GapModel.CONSTANT)
def _fill_constant(a, b, table, penalty, gap_open, gap_extend, exclude_diagonal):
    return constant_matrix(a, b, table, penalty=penalty, exclude_diagonal=exclude_diagonal)


@register(GapModel.AFFINE)
def _fill_affine(a, b, table, penalty, gap_open, gap_extend, exclude_diagonal):
    return affine_matrices(a, b, table, gap_open=gap_open, gap_extend=gap_extend,
                           exclude_diagonal=exclude_diagonal).composite


def _as_table(table: Union[ScoreMatrix, np.ndarray]) -> np.ndarray:
    scores = np.ascontiguousarray(table, dtype=_SCORE_DTYPE)
    if scores.ndim != 2 or scores.shape[0] != scores.shape[1]:
        raise ValueError(f'Substitution table must be square, got shape {scores.shape}')
    return scores


def _as_codes(seq: Union[np.ndarray, Iterable[int]], scores: np.ndarray) -> np.ndarray:
    codes = np.ascontiguousarray(seq if isinstance(seq, np.ndarray) else list(seq), dtype=np.uint8)
    if codes.ndim != 1: raise ValueError(f'Encoded sequence must be one-dimensional, got shape {codes.shape}')
    if codes.size and codes.max() >= scores.shape[0]:
        raise ValueError(f'Symbol code {codes.max()} is outside the {scores.shape[0]}x{scores.shape[0]} '
                         f'substitution table')
    return codes


# Kernels --------------------------------------------------------------------------------------------------------------
@jit(nopython=True, cache=True, nogil=True)
def _floor_max(x, y, z):
    """Maximum of three candidates and 0."""
    best = 0
    if x > best: best = x
    if y > best: best = y
    if z > best: best = z
    return best


@jit(nopython=True, cache=True, nogil=True)
def _constant_kernel(a, b, table, penalty, exclude_diagonal):
    n = a.shape[0]
    m = b.shape[0]
    H = np.zeros((n + 1, m + 1), dtype=np.int64)
    for i in range(1, n + 1):
        row = table[a[i - 1]]
        for j in range(1, m + 1):
            if exclude_diagonal and i == j: continue
            H[i, j] = _floor_max(
                H[i - 1, j - 1] + row[b[j - 1]],  # substitution
                H[i - 1, j] - penalty,  # gap in B
                H[i, j - 1] - penalty  # gap in A
            )
    return H


@jit(nopython=True, cache=True, nogil=True)
def _affine_kernel(a, b, table, gap_open, gap_extend, exclude_diagonal):
    n = a.shape[0]
    m = b.shape[0]
    M = np.zeros((n + 1, m + 1), dtype=np.int64)
    Ga = np.zeros((n + 1, m + 1), dtype=np.int64)
    Gb = np.zeros((n + 1, m + 1), dtype=np.int64)
    new_gap = gap_open + gap_extend
    for i in range(1, n + 1):
        row = table[a[i - 1]]
        for j in range(1, m + 1):
            if exclude_diagonal and i == j: continue
            s = row[b[j - 1]]
            match = _floor_max(M[i - 1, j - 1] + s, Ga[i - 1, j - 1] + s, Gb[i - 1, j - 1] + s)
            gap_a = _floor_max(M[i, j - 1] - new_gap, Ga[i, j - 1] - gap_extend, Gb[i, j - 1] - new_gap)
            gap_b = _floor_max(M[i - 1, j] - new_gap, Ga[i - 1, j] - new_gap, Gb[i - 1, j] - gap_extend)
            Ga[i, j] = gap_a
            Gb[i, j] = gap_b
            M[i, j] = _floor_max(match, gap_a, gap_b)
    return M, Ga, Gb
