"""
Module containing various utility functions and classes.
"""
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Union


# Classes --------------------------------------------------------------------------------------------------------------
@dataclass(frozen=True, kw_only=True)
class Config:
    """
    Config parent class that can conveniently set attributes from CLI args.

    Only the fields declared on the subclass are read from ``obj``; attributes that are missing or ``None``
    fall back to the field defaults.

    Examples:
        >>> args = parser.parse_args(['constant', '-a', 'a.fa', '-b', 'b.fa'])
        >>> config = RunConfig.from_obj(args)
    """
    @classmethod
    def from_obj(cls, obj: Any) -> 'Config':
        return cls(**{f.name: val for f in fields(cls) if (val := getattr(obj, f.name, None)) is not None})


# Functions ------------------------------------------------------------------------------------------------------------
def resolve_output(path: Union[str, Path], default_name: str) -> Union[str, Path]:
    """
    Resolves where an output file should be written.

    If the path is '-' or 'stdout', it is returned as is.
    If the path is an existing directory, ``default_name`` is placed inside it.
    Otherwise the path is treated as a file, which may not exist yet.

    :param path: The path to the file or directory.
    :param default_name: File name used when ``path`` is a directory.
    :return: The file path to write to, or the stdout marker.
    """
    if path in {'-', 'stdout'}:
        return path
    if not isinstance(path, Path):  # Coerce to Path object
        path = Path(path)
    path = path.expanduser()
    if path.is_dir():
        return path / default_name
    return path
