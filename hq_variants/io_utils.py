"""I/O utilities for transparent gzip handling and atomic output.

Provides smart file opening that auto-detects gzip compression by checking
magic bytes, and an atomic writer that publishes a file only once it has been
completely written.

Example:
    with smart_open(Path("S1.vcf.gz")) as f:
        for line in f:
            process(line)

    with atomic_write(Path("hq_allvariants.tsv")) as out:
        out.write(header)
"""

import gzip
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Literal

# Gzip magic bytes (first two bytes of gzip and BGZF files)
GZIP_MAGIC = b"\x1f\x8b"


def is_gzipped(filepath: Path) -> bool:
    """Detect if a file is gzip-compressed.

    Checks magic bytes first (reliable), falls back to extension if file
    is too small or unreadable.

    Args:
        filepath: Path to file to check

    Returns:
        True if file is gzip-compressed
    """
    try:
        with open(filepath, "rb") as f:
            magic = f.read(2)
            if len(magic) >= 2:
                return magic == GZIP_MAGIC
    except OSError:
        pass

    # Fall back to extension check
    return filepath.suffix == ".gz"


@contextmanager
def smart_open(
    filepath: Path,
    mode: Literal["r", "rt", "rb"] = "rt",
) -> Iterator[IO[str] | IO[bytes]]:
    """Open a file with automatic gzip detection.

    Args:
        filepath: Path to file (may be .gz, BGZF, or uncompressed)
        mode: File mode ('r' or 'rt' for text, 'rb' for binary)

    Yields:
        File handle (text or binary based on mode)
    """
    if mode == "r":
        mode = "rt"

    if is_gzipped(filepath):
        if mode == "rt":
            f = gzip.open(filepath, mode, encoding="utf-8")
        else:
            f = gzip.open(filepath, mode)
    else:
        if mode == "rt":
            f = open(filepath, mode, encoding="utf-8")
        else:
            f = open(filepath, mode)

    try:
        yield f
    finally:
        f.close()


@contextmanager
def atomic_write(output_path: Path, suffix: str = ".tmp") -> Iterator[IO[str]]:
    """Write a text file atomically using temp file + rename.

    The temporary file lives in the destination directory so the final
    rename never crosses a filesystem. If the block raises, the temporary
    file is removed and the destination is left untouched.

    Args:
        output_path: Final destination path
        suffix: Suffix for the temporary file

    Yields:
        Writable text handle for the temporary file
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)

    tmp = tempfile.NamedTemporaryFile(
        mode="w",
        dir=output_path.parent,
        prefix=f".{output_path.name}.",
        suffix=suffix,
        delete=False,
        encoding="utf-8",
        newline="",
    )
    tmp_path = Path(tmp.name)
    try:
        with tmp:
            yield tmp
        os.replace(tmp_path, output_path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
