"""
Local-alignment score matrices and diagonal-offset profiles for nucleotide sequences.

Two sequences are scored against each other with a Smith-Waterman style fill (constant or affine gap costs) and the
resulting matrix is collapsed into per-diagonal sums, whose peaks reveal the repeat period between the sequences
(e.g. rolling-circle consensus reads).

Examples:
    >>> from swdiag import Alphabet, ScoreMatrix, constant_matrix, diagonal_sums
    >>> a = b = Alphabet.DNA_N.encode(b'ACGT')
    >>> diagonal_sums(constant_matrix(a, b, ScoreMatrix.nucleotide(), penalty=25))
    array([50,  0,  0,  0,  0])
"""


# Exceptions and Warnings ----------------------------------------------------------------------------------------------
class SwdiagWarning(Warning): pass


from swdiag.core.alphabet import Alphabet, AlphabetError, Nucleotide  # noqa: E402
from swdiag.engines.scoring import ScoreMatrix  # noqa: E402
from swdiag.engines.matrix import GapModel, AffineMatrices, constant_matrix, affine_matrices, fill  # noqa: E402
from swdiag.engines.profile import diagonal_sums, dominant_period  # noqa: E402

__all__ = [
    'SwdiagWarning',
    'Alphabet', 'AlphabetError', 'Nucleotide',
    'ScoreMatrix',
    'GapModel', 'AffineMatrices', 'constant_matrix', 'affine_matrices', 'fill',
    'diagonal_sums', 'dominant_period',
]
