import numpy as np
import pytest
from swdiag.core.alphabet import Nucleotide
from swdiag.engines.scoring import ScoreMatrix


class TestNucleotideMatrix:
    def test_wildcard_table(self):
        m = ScoreMatrix.nucleotide()
        assert m.shape == (5, 5)
        np.testing.assert_array_equal(m.data, [
            [5, -4, -4, -4, 0],
            [-4, 5, -4, -4, 0],
            [-4, -4, 5, -4, 0],
            [-4, -4, -4, 5, 0],
            [0, 0, 0, 0, 0],
        ])

    def test_strict_table(self):
        m = ScoreMatrix.nucleotide(wildcard=False)
        assert m.shape == (4, 4)
        assert m.data.size == 16
        assert m.score(Nucleotide.G, Nucleotide.G) == 5
        assert m.score(Nucleotide.G, Nucleotide.T) == -4

    def test_wildcard_scores_zero_against_everything(self):
        m = ScoreMatrix.nucleotide()
        for base in Nucleotide:
            assert m.score(Nucleotide.N, base) == 0
            assert m.score(base, Nucleotide.N) == 0

    def test_symmetric(self):
        assert ScoreMatrix.nucleotide().is_symmetric()
        assert ScoreMatrix.nucleotide(wildcard=False).is_symmetric()

    def test_read_only(self):
        m = ScoreMatrix.nucleotide()
        with pytest.raises(ValueError):
            m.data[0, 0] = 100


class TestScoreMatrixBuild:
    def test_build(self):
        m = ScoreMatrix.build(3, match=2, mismatch=-1)
        np.testing.assert_array_equal(m.data, [[2, -1, -1], [-1, 2, -1], [-1, -1, 2]])

    def test_not_square(self):
        with pytest.raises(ValueError, match="square"):
            ScoreMatrix([[1, 2, 3], [4, 5, 6]])

    def test_array_protocol(self):
        m = ScoreMatrix.nucleotide()
        assert np.asarray(m, dtype=np.int64).dtype == np.int64
        assert m == ScoreMatrix.nucleotide()
        assert m != ScoreMatrix.nucleotide(wildcard=False)
