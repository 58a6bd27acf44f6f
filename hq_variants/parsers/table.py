"""High-quality variant table reader.

Per-sample (<sample_id>_hq.tsv) and merged (hq_allvariants.tsv) tables share
one layout: a single header line followed by tab-separated data rows.

CHROM  POS  REF  ALT  QUAL  DP  AF    SAMPLE_ID
chr1   100  A    G    35    20  0.05  S1
"""

from collections.abc import Iterator
from pathlib import Path

from hq_variants.io_utils import smart_open


def read_table_header(filepath: Path) -> str | None:
    """Return the header line of a table, or None for an empty file."""
    with smart_open(filepath) as f:
        line = f.readline()
    if not line:
        return None
    return line.rstrip("\r\n")


def iter_table_rows(filepath: Path) -> Iterator[str]:
    """Stream the data rows of a table.

    The first line is the header and is always skipped; blank lines are
    dropped. Rows are returned verbatim, without re-validation.

    Args:
        filepath: Path to table (gzipped or plain)

    Yields:
        Data rows without trailing newline

    Raises:
        FileNotFoundError: If file doesn't exist
    """
    if not filepath.exists():
        raise FileNotFoundError(f"Table not found: {filepath}")

    with smart_open(filepath) as f:
        for line_num, line in enumerate(f, 1):
            if line_num == 1:
                continue
            line = line.rstrip("\r\n")
            if line:
                yield line
