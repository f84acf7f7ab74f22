from io import IOBase
from typing import Union, BinaryIO, Optional, Callable
from pathlib import Path
from sys import stdin
import bz2
import gzip
import lzma


# Classes --------------------------------------------------------------------------------------------------------------
class Xopen:
    """
    Opens sequence inputs for reading, transparently decompressing them.

    Accepts a path, ``'-'``/``'stdin'`` or an already open binary stream. Compression is detected from the leading
    magic bytes, not from the file extension.

    Examples:
        >>> with Xopen("reads.fasta.gz") as f:
        ...     content = f.read()
    """
    _MAGIC = {
        b'\x1f\x8b': gzip.open,
        b'\x42\x5a\x68': bz2.open,
        b'\xfd7zXZ\x00': lzma.open,
    }
    _MIN_N_BYTES = max(len(i) for i in _MAGIC.keys())

    def __init__(self, file: Union[str, Path, BinaryIO]):
        """
        Initializes the Xopen context manager.

        Args:
            file: File path (str or Path), '-' for stdin, or an existing binary file object.
        """
        self.file = file
        self._handles: list[BinaryIO] = []

    def __enter__(self) -> BinaryIO:
        """
        Opens the file and returns the (decompressed) binary handle.

        Raises:
            OSError: If the file cannot be opened.
        """
        return self._open()

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Closes every handle opened by this instance, innermost first."""
        while self._handles: self._handles.pop().close()

    def _open(self) -> BinaryIO:
        # 1. Resolve Raw Stream
        if isinstance(self.file, IOBase):
            raw_stream = self.file
        elif str(self.file) in {'-', 'stdin'}:
            raw_stream = stdin.buffer
        else:
            raw_stream = open(Path(self.file).expanduser(), mode='rb')
            self._handles.append(raw_stream)

        # 2. Sniff Compression
        if opener := self._sniff(raw_stream):
            handle = opener(raw_stream, mode='rb')
            self._handles.append(handle)
            return handle
        return raw_stream

    def _sniff(self, stream: BinaryIO) -> Optional[Callable]:
        if hasattr(stream, 'peek'):  # BufferedReader, including stdin
            start = stream.peek(self._MIN_N_BYTES)[:self._MIN_N_BYTES]
        elif stream.seekable():
            pos = stream.tell()
            start = stream.read(self._MIN_N_BYTES)
            stream.seek(pos)
        else:
            return None
        for magic, opener in self._MAGIC.items():
            if start.startswith(magic): return opener
        return None
