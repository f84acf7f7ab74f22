"""Nucleotide alphabets."""
