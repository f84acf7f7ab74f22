"""
Reading sequence inputs and writing profiles and matrices.
"""
from swdiag import SwdiagWarning


# Exceptions and Warnings ----------------------------------------------------------------------------------------------
class ParserError(Exception):
    """Raised when a sequence file is malformed."""


class SeqFileError(Exception):
    """Raised when a sequence file cannot be used (unreadable, missing or empty)."""


class SeqFileWarning(SwdiagWarning):
    """Issued for recoverable oddities in sequence files."""


from swdiag.io.open import Xopen  # noqa: E402
from swdiag.io.fasta import Record, FastaReader, read_first  # noqa: E402
from swdiag.io.emit import write_profile, write_matrix, save_profile, DEFAULT_OUTPUT  # noqa: E402
