"""Substitution scores for the nucleotide alphabets."""
from typing import Union, Iterable

import numpy as np

from swdiag.core.alphabet import Alphabet, Nucleotide


# Classes --------------------------------------------------------------------------------------------------------------
class ScoreMatrix:
    """
    Represents a substitution matrix for alignment.

    The matrix is indexed by encoded symbols, so ``matrix[Nucleotide.A, Nucleotide.C]`` is the score of aligning
    A against C.

    Examples:
        >>> m = ScoreMatrix.nucleotide()
        >>> m.score(Nucleotide.A, Nucleotide.A), m.score(Nucleotide.A, Nucleotide.C), m.score(Nucleotide.N, Nucleotide.N)
        (5, -4, 0)
    """
    _DTYPE = np.int32
    MATCH = 5
    MISMATCH = -4
    __slots__ = ('_data',)

    def __init__(self, data: Union[np.ndarray, Iterable]):
        data = np.array(data, dtype=self._DTYPE)
        if data.ndim != 2 or data.shape[0] != data.shape[1]:
            raise ValueError(f'Substitution matrix must be square, got shape {data.shape}')
        self._data = data
        self._data.flags.writeable = False

    def __getitem__(self, item): return self._data[item]
    def __array__(self, dtype=None, copy=None): return self._data.astype(dtype, copy=False) if dtype else self._data
    def __len__(self): return self._data.shape[0]
    def __repr__(self): return f"ScoreMatrix{self._data.shape}"
    def __eq__(self, other): return isinstance(other, ScoreMatrix) and np.array_equal(self._data, other._data)
    __hash__ = None

    @property
    def shape(self): return self._data.shape

    @property
    def data(self) -> np.ndarray:
        """The read-only ``int32`` score array."""
        return self._data

    def score(self, a: int, b: int) -> int:
        """Returns the substitution score of two encoded symbols."""
        return int(self._data[a, b])

    def is_symmetric(self) -> bool:
        return bool(np.array_equal(self._data, self._data.T))

    @classmethod
    def build(cls, n: int, match: int = 1, mismatch: int = -1) -> 'ScoreMatrix':
        """Builds a simple match/mismatch matrix."""
        M = np.full((n, n), mismatch, dtype=cls._DTYPE)
        np.fill_diagonal(M, match)
        return cls(M)

    @classmethod
    def nucleotide(cls, wildcard: bool = True, match: int = MATCH, mismatch: int = MISMATCH) -> 'ScoreMatrix':
        """
        Returns the fixed nucleotide substitution matrix.

        Args:
            wildcard: Adds a row and column for ``N`` that scores 0 against every symbol, itself included.
            match: Score on the diagonal.
            mismatch: Score off the diagonal.

        Returns:
            A 4x4 (``ACGT``) or 5x5 (``ACGTN``) ScoreMatrix.
        """
        n = len(Alphabet.DNA_N) if wildcard else len(Alphabet.DNA)
        M = np.full((n, n), mismatch, dtype=cls._DTYPE)
        np.fill_diagonal(M, match)
        if wildcard:
            M[Nucleotide.N, :] = 0
            M[:, Nucleotide.N] = 0
        return cls(M)
