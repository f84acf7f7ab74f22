"""
Writers for diagonal profiles and raw score matrices.
"""
from os import replace, chmod, umask
from pathlib import Path
from stat import S_IMODE
import sys
from tempfile import NamedTemporaryFile
from typing import Union, TextIO

import numpy as np

from swdiag.utils import resolve_output


# Constants ------------------------------------------------------------------------------------------------------------
DEFAULT_OUTPUT = 'SW_PARSE.txt'


# Functions ------------------------------------------------------------------------------------------------------------
def write_profile(profile: np.ndarray, handle: TextIO):
    """
    Writes a diagonal profile as ``<offset>:<score>`` lines in ascending offset order.

    :param profile: The diagonal profile, one entry per offset.
    :param handle: Text handle to write to.
    """
    handle.writelines(f"{offset}:{score}\n" for offset, score in enumerate(np.asarray(profile).tolist()))


def write_matrix(matrix: np.ndarray, handle: TextIO):
    """
    Writes a score matrix, one row per line, cells separated by single spaces.

    :param matrix: 2D score matrix.
    :param handle: Text handle to write to.
    """
    for row in np.asarray(matrix).tolist():
        handle.write(' '.join(map(str, row)))
        handle.write('\n')


def save_profile(profile: np.ndarray, path: Union[str, Path] = DEFAULT_OUTPUT) -> Union[str, Path]:
    """
    Saves a diagonal profile to a file.

    If ``path`` is an existing directory the profile is written to ``SW_PARSE.txt`` inside it; '-' or 'stdout' writes
    to standard output. Files are written to a temporary sibling first and only moved into place once complete, so a
    failed run never leaves a partial profile behind.

    :param profile: The diagonal profile.
    :param path: Output file, directory or stdout marker.
    :return: The resolved output location.
    """
    out = resolve_output(path, DEFAULT_OUTPUT)
    if out in {'-', 'stdout'}:
        write_profile(profile, sys.stdout)
        sys.stdout.flush()
        return out
    with NamedTemporaryFile('w', dir=out.parent, prefix=f'.{out.name}.', suffix='.tmp', delete=False) as tmp:
        try:
            write_profile(profile, tmp)
        except BaseException:
            tmp.close()
            Path(tmp.name).unlink(missing_ok=True)
            raise
    chmod(tmp.name, _output_mode(out))
    replace(tmp.name, out)
    return out


def _output_mode(out: Path) -> int:
    """Mode of an overwritten file, else the mode a plain ``open(out, 'w')`` would create."""
    if out.exists(): return S_IMODE(out.stat().st_mode)
    mask = umask(0)
    umask(mask)
    return 0o666 & ~mask
