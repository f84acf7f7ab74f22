"""
Module for representing the nucleotide alphabets the scoring engine accepts
"""
from enum import IntEnum
from typing import Final, ClassVar, Union

import numpy as np


# Exceptions and Warnings ----------------------------------------------------------------------------------------------
class AlphabetError(Exception):
    """Raised when an alphabet is invalid or a sequence contains symbols outside the alphabet."""


# Classes --------------------------------------------------------------------------------------------------------------
class Nucleotide(IntEnum):
    """Encoded nucleotide codes, in substitution table order. ``N`` is the wildcard."""
    A = 0
    C = 1
    G = 2
    T = 3
    N = 4


class Alphabet:
    """
    A class to represent an alphabet of ASCII symbols.

    Symbols are encoded to their index in the alphabet (``uint8``). Lower case input maps to the same index as upper
    case. Encoding is strict: a byte that is not in the alphabet raises ``AlphabetError`` instead of being dropped or
    mapped to a neighbouring index.

    Examples:
        >>> Alphabet.DNA_N.encode(b'ACgtN')
        array([0, 1, 2, 3, 4], dtype=uint8)
        >>> Alphabet.DNA.encode(b'ACGN')
        Traceback (most recent call last):
        ...
        AlphabetError: Unsupported symbol 'N' at position 3 (alphabet: ACGT)
    """
    __slots__ = ('_data', '_lookup_table', '_decode_table')
    DTYPE: Final = np.uint8
    INVALID: Final = np.iinfo(DTYPE).max
    MAX_LEN: Final = INVALID + 1
    ENCODING: Final = 'ascii'

    DNA: ClassVar['Alphabet']
    DNA_N: ClassVar['Alphabet']

    def __init__(self, symbols: bytes):
        """
        Initializes an Alphabet.

        Args:
            symbols: The symbols in the alphabet as bytes, in encoding order.

        Raises:
            AlphabetError: If symbols are empty, not ASCII, too long or contain duplicates.
        """
        if not symbols: raise AlphabetError('Alphabet must contain at least one symbol')
        if not symbols.isascii(): raise AlphabetError('Alphabet symbols must be a valid ASCII string')
        if len(symbols) >= self.MAX_LEN:
            raise AlphabetError(f'Alphabet size must be below {self.MAX_LEN} symbols ({self.DTYPE})')
        if len(set(symbols.upper())) != len(symbols): raise AlphabetError('Alphabet contains duplicate symbols')

        self._data: np.ndarray = np.frombuffer(symbols, dtype=self.DTYPE)

        # Build Lookup Table
        self._lookup_table = np.full(self.MAX_LEN, self.INVALID, dtype=self.DTYPE)
        indices = np.arange(len(symbols), dtype=self.DTYPE)
        self._lookup_table[np.frombuffer(symbols.upper(), dtype=self.DTYPE)] = indices
        self._lookup_table[np.frombuffer(symbols.lower(), dtype=self.DTYPE)] = indices
        self._lookup_table.flags.writeable = False

        # Build Decode Table (for fast tobytes)
        decode_map = np.zeros(self.MAX_LEN, dtype=self.DTYPE)
        decode_map[:len(self._data)] = self._data
        self._decode_table = decode_map.tobytes()

    def __len__(self):
        return len(self._data)

    def __contains__(self, item):
        if isinstance(item, (int, np.integer)):
            return 0 <= item < self.MAX_LEN and self._lookup_table[item] != self.INVALID
        if isinstance(item, (str, bytes)):
            if len(item) != 1: return False
            val = ord(item) if isinstance(item, str) else item[0]
            return val < self.MAX_LEN and self._lookup_table[val] != self.INVALID
        return False

    def __iter__(self):
        return iter(self._data)

    def __repr__(self):
        return f"Alphabet({self})"

    def __str__(self):
        return self._data.tobytes().decode(self.ENCODING)

    def __eq__(self, other):
        if self is other: return True
        if not isinstance(other, Alphabet): return False
        return np.array_equal(self._data, other._data)

    def __hash__(self):
        return hash(self._data.tobytes())

    @property
    def symbols(self) -> bytes:
        """The canonical symbols in encoding order."""
        return self._data.tobytes()

    def encode(self, text: Union[str, bytes]) -> np.ndarray:
        """
        Encodes a byte string to an array of symbol indices.

        Args:
            text: The text to encode, as bytes or an ASCII string.

        Returns:
            A numpy array of encoded indices.

        Raises:
            AlphabetError: If the text contains a symbol outside the alphabet.
        """
        if isinstance(text, str):
            try: text = text.encode(self.ENCODING)
            except UnicodeEncodeError as e:
                raise AlphabetError(f'Unsupported symbol {text[e.start]!r} at position {e.start} '
                                    f'(alphabet: {self})') from e
        encoded = self._lookup_table[np.frombuffer(text, dtype=self.DTYPE)]
        if (invalid := np.flatnonzero(encoded == self.INVALID)).size:
            pos = int(invalid[0])
            raise AlphabetError(f'Unsupported symbol {chr(text[pos])!r} at position {pos} (alphabet: {self})')
        return encoded

    def decode(self, encoded: np.ndarray) -> bytes:
        """Decodes an array of indices back to bytes.

        Args:
            encoded: The numpy array of indices (uint8).

        Returns:
            The decoded bytes string.
        """
        if encoded.dtype != self.DTYPE:
            encoded = encoded.astype(self.DTYPE, copy=False)
        return encoded.tobytes().translate(self._decode_table)


# Constants ------------------------------------------------------------------------------------------------------------
Alphabet.DNA = Alphabet(b'ACGT')
Alphabet.DNA_N = Alphabet(b'ACGTN')
