"""
End-to-end run: read two sequences, fill the score matrix, sum its diagonals and write the profile.
"""
from dataclasses import dataclass, fields
from pathlib import Path
from time import perf_counter
from typing import Union, Optional, TextIO
import logging
import sys

import numpy as np

from swdiag.core.alphabet import Alphabet, AlphabetError
from swdiag.engines.scoring import ScoreMatrix
from swdiag.engines.matrix import GapModel, fill
from swdiag.engines.profile import diagonal_sums, dominant_period
from swdiag.io import read_first, write_matrix, save_profile, DEFAULT_OUTPUT
from swdiag.utils import Config
from swdiag.utils.resources import RESOURCES

logger = logging.getLogger(__name__)


# Classes --------------------------------------------------------------------------------------------------------------
@dataclass(frozen=True, kw_only=True)
class RunConfig(Config):
    """
    Parameters of one run, fixed for its whole duration.

    Attributes:
        seq_a: FASTA file holding sequence A (matrix rows).
        seq_b: FASTA file holding sequence B (matrix columns).
        model: Gap cost model.
        penalty: Flat gap penalty (constant model).
        gap_open: Gap open penalty (affine model).
        gap_extend: Gap extend penalty (affine model).
        exclude_diagonal: Force the main diagonal of the matrix to 0.
        print_matrix: Dump the (composite) score matrix.
        out: Output file or directory for the profile.
        wildcard: Accept ``N`` as a wildcard scoring 0 against everything.
    """
    seq_a: Union[str, Path]
    seq_b: Union[str, Path]
    model: GapModel = GapModel.CONSTANT
    penalty: int = 25
    gap_open: int = 25
    gap_extend: int = 1
    exclude_diagonal: bool = False
    print_matrix: bool = False
    out: Union[str, Path] = DEFAULT_OUTPUT
    wildcard: bool = True

    def __post_init__(self):
        if isinstance(self.model, str): object.__setattr__(self, 'model', GapModel[self.model.upper()])
        for name in ('penalty', 'gap_open', 'gap_extend'):
            if (value := getattr(self, name)) < 0: raise ValueError(f'{name} must be >= 0, got {value}')

    @property
    def alphabet(self) -> Alphabet:
        return Alphabet.DNA_N if self.wildcard else Alphabet.DNA

    @property
    def scores(self) -> ScoreMatrix:
        return ScoreMatrix.nucleotide(wildcard=self.wildcard)

    @property
    def profile_to_stdout(self) -> bool:
        return str(self.out) in {'-', 'stdout'}


@dataclass(frozen=True)
class RunResult:
    """Outputs of a run."""
    matrix: np.ndarray
    profile: np.ndarray
    out: Union[str, Path]
    elapsed: float


# Functions ------------------------------------------------------------------------------------------------------------
def load_sequence(file: Union[str, Path], alphabet: Alphabet, label: str) -> np.ndarray:
    """
    Reads the first record of a FASTA file and encodes its sequence.

    Raises:
        SeqFileError: If the file cannot be read or holds no records.
        AlphabetError: If the sequence contains symbols outside ``alphabet``.
    """
    record = read_first(file)
    try:
        return alphabet.encode(record.seq)
    except AlphabetError as e:
        raise AlphabetError(f'Sequence {label} ({record} in {file}): {e}') from e


def run(config: RunConfig, matrix_handle: Optional[TextIO] = None) -> RunResult:
    """
    Runs the whole pipeline for one pair of sequences.

    Args:
        config: The run parameters.
        matrix_handle: Where the matrix goes when ``config.print_matrix`` is set (default: stdout, or stderr when the
            profile itself goes to stdout).

    Returns:
        The composite matrix, its diagonal profile, where the profile was written and the elapsed time.
    """
    start = perf_counter()
    a = load_sequence(config.seq_a, config.alphabet, 'A')
    b = load_sequence(config.seq_b, config.alphabet, 'B')
    logger.debug('Filling %s matrix of %d x %d cells (%s backend, %s CPUs available)', config.model.name.lower(),
                 len(a) + 1, len(b) + 1, RESOURCES.backend, RESOURCES.available_cpus)

    matrix = fill(config.model, a, b, config.scores, penalty=config.penalty, gap_open=config.gap_open,
                  gap_extend=config.gap_extend, exclude_diagonal=config.exclude_diagonal)
    profile = diagonal_sums(matrix)

    if config.print_matrix:
        # Matrix and profile never share a stream
        if matrix_handle is None: matrix_handle = sys.stderr if config.profile_to_stdout else sys.stdout
        write_matrix(matrix, matrix_handle)

    out = save_profile(profile, config.out)
    elapsed = perf_counter() - start

    logger.info('Running parameters:')
    for field in fields(config):
        value = getattr(config, field.name)
        logger.info('  %s: %s', field.name, value.name.lower() if isinstance(value, GapModel) else value)
    logger.info('Wrote %d offsets to %s (dominant period: %d)', len(profile), out, dominant_period(profile))
    logger.info('Took %.3fs to run', elapsed)
    return RunResult(matrix, profile, out, elapsed)
