"""
sources.py

Responsibility: find the C++ source and header files under a directory.
"""

from __future__ import annotations

import os
from pathlib import Path


def _raise(error: OSError) -> None:
    raise error


def collect_source_files(root: str | Path, src_ext: str, hdr_ext: str) -> list[Path]:
    """
    Return every file under `root` ending in `.<src_ext>` or `.<hdr_ext>`.

    Entries are visited in name order within each directory. A directory that
    cannot be listed (including a missing `root`) raises OSError; nothing is
    returned partially. Symlinked directories are followed once each.
    """
    suffixes = (f".{src_ext}", f".{hdr_ext}")
    found: list[Path] = []
    seen: set[tuple[int, int]] = set()

    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise, followlinks=True):
        st = os.stat(dirpath)
        if (st.st_dev, st.st_ino) in seen:
            dirnames[:] = []
            continue
        seen.add((st.st_dev, st.st_ino))

        dirnames.sort()
        for name in sorted(filenames):
            if name.endswith(suffixes):
                found.append(Path(dirpath) / name)
    return found
