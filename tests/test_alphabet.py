import numpy as np
import pytest
from swdiag.core.alphabet import Alphabet, AlphabetError, Nucleotide


class TestAlphabetInit:
    def test_valid_init(self):
        alpha = Alphabet(b'ACGT')
        assert len(alpha) == 4
        assert alpha.symbols == b'ACGT'
        assert b'A' in alpha
        assert b'Z' not in alpha

    def test_init_invalid_ascii(self):
        with pytest.raises(AlphabetError, match="valid ASCII"):
            Alphabet(b'ACG\xff')

    def test_init_duplicates(self):
        with pytest.raises(AlphabetError, match="duplicate"):
            Alphabet(b'AACGT')

    def test_init_case_duplicates(self):
        with pytest.raises(AlphabetError, match="duplicate"):
            Alphabet(b'ACGTa')

    def test_init_empty(self):
        with pytest.raises(AlphabetError, match="at least one"):
            Alphabet(b'')


class TestAlphabetEncoding:
    def test_encode_decode_roundtrip(self):
        alpha = Alphabet.DNA_N
        encoded = alpha.encode(b'ACGTN')
        np.testing.assert_array_equal(encoded, [0, 1, 2, 3, 4])
        assert alpha.decode(encoded) == b'ACGTN'

    def test_codes_follow_nucleotide_enum(self):
        encoded = Alphabet.DNA_N.encode(b'TGCAN')
        assert list(encoded) == [Nucleotide.T, Nucleotide.G, Nucleotide.C, Nucleotide.A, Nucleotide.N]

    def test_encode_str(self):
        np.testing.assert_array_equal(Alphabet.DNA.encode('GATTACA'), Alphabet.DNA.encode(b'GATTACA'))

    def test_encode_mixed_case(self):
        np.testing.assert_array_equal(Alphabet.DNA.encode(b'acgT'), [0, 1, 2, 3])

    def test_encode_empty(self):
        encoded = Alphabet.DNA.encode(b'')
        assert encoded.shape == (0,)
        assert encoded.dtype == np.uint8

    def test_encode_invalid_chars_raise(self):
        # Unknown symbols are rejected, never dropped or mapped to another base
        with pytest.raises(AlphabetError, match=r"'Z' at position 4"):
            Alphabet.DNA_N.encode(b'ACGTZ')

    def test_wildcard_rejected_by_strict_alphabet(self):
        with pytest.raises(AlphabetError, match=r"'N' at position 2"):
            Alphabet.DNA.encode(b'ACNT')

    def test_reports_first_invalid_symbol(self):
        with pytest.raises(AlphabetError, match=r"'-' at position 1"):
            Alphabet.DNA.encode(b'A-C*')

    def test_non_ascii_str(self):
        with pytest.raises(AlphabetError, match="position 2"):
            Alphabet.DNA.encode('ACé')


class TestAlphabetProperties:
    def test_containment(self):
        dna = Alphabet.DNA
        assert b'A' in dna
        assert 'a' in dna
        assert 65 in dna  # ord('A')
        assert b'N' not in dna
        assert b'N' in Alphabet.DNA_N
        assert 300 not in dna
        assert b'AC' not in dna

    def test_equality(self):
        assert Alphabet(b'ACGT') == Alphabet.DNA
        assert Alphabet.DNA != Alphabet.DNA_N
        assert hash(Alphabet(b'ACGT')) == hash(Alphabet.DNA)

    def test_str(self):
        assert str(Alphabet.DNA_N) == 'ACGTN'
