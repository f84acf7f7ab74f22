from lzma import LZMAError
from pathlib import Path
from typing import Union, Generator, BinaryIO, Iterable
from warnings import warn
import zlib

from swdiag.io import ParserError, SeqFileError, SeqFileWarning
from swdiag.io.open import Xopen


# Classes --------------------------------------------------------------------------------------------------------------
class Record:
    """
    A FASTA record: identifier, description and raw sequence bytes.

    Examples:
        >>> rec = Record(b'read_1', b'rolling circle', b'ACGTACGT')
        >>> len(rec)
        8
    """
    __slots__ = ('id', 'description', 'seq')
    def __init__(self, id_: bytes, desc: bytes, seq: bytes):
        self.id: bytes = id_
        self.description: bytes = desc
        self.seq: bytes = seq

    def __str__(self): return self.id.decode(errors='ignore')
    def __repr__(self) -> str: return f'Record({self.id!r}, {len(self)} bp)'
    def __len__(self) -> int: return len(self.seq)
    def __eq__(self, other) -> bool:
        if not isinstance(other, Record): return False
        return (self.id, self.description, self.seq) == (other.id, other.description, other.seq)
    __hash__ = None


class FastaReader:
    """
    Line-oriented reader for FASTA format streams.

    Sequence lines following a header are joined into one sequence; blank lines and ``\\r\\n`` endings are tolerated.

    Examples:
        >>> with open("reads.fasta", "rb") as f:
        ...     for record in FastaReader(f):
        ...         print(record.id, len(record))
    """
    __slots__ = ('_handle',)
    def __init__(self, handle: BinaryIO):
        self._handle = handle

    def __iter__(self) -> Generator[Record, None, None]:
        """
        Iterates over FASTA records.

        Yields:
            Record objects.

        Raises:
            ParserError: If sequence data appears before the first header.
        """
        header = None
        seq_parts = []
        for line_no, line in enumerate(self._handle, start=1):
            line = line.strip()
            if not line: continue
            if line.startswith(b'>'):
                if header is not None: yield self._make_record(header, seq_parts)
                header, seq_parts = line[1:].strip(), []
            elif header is None:
                raise ParserError(f'Sequence data found before the first FASTA header (line {line_no})')
            else:
                seq_parts.append(line)
        if header is not None:
            yield self._make_record(header, seq_parts)

    @staticmethod
    def _make_record(header: bytes, seq_parts: Iterable[bytes]) -> Record:
        name, _, desc = header.partition(b' ')
        return Record(name, desc.strip(), b''.join(seq_parts))


# Functions ------------------------------------------------------------------------------------------------------------
def read_first(file: Union[str, Path, BinaryIO]) -> Record:
    """
    Reads the first record of a FASTA file.

    Args:
        file: Path to a (possibly compressed) FASTA file, '-' for stdin, or an open binary stream.

    Returns:
        The first Record.

    Raises:
        SeqFileError: If the file cannot be read or contains no records.
        ParserError: If the file is not FASTA formatted.
    """
    try:
        with Xopen(file) as handle:
            records = iter(FastaReader(handle))
            first = next(records, None)
            if first is None: raise SeqFileError(f'No FASTA records found in {file}')
            if next(records, None) is not None:
                warn(f'{file} contains more than one record, only the first ({first}) is used', SeqFileWarning)
    except (OSError, EOFError, LZMAError, zlib.error) as e:
        raise SeqFileError(f'Cannot read {file}: {e}') from e
    if not first.seq:
        warn(f'Record {first} in {file} has an empty sequence', SeqFileWarning)
    return first
