"""VCF record parser.

Implements streaming VCF parsing for per-sample variant files. Supports
gzip/BGZF-compressed and plain files.

VCF body format (tab-separated, at least 8 columns):
#CHROM  POS  ID  REF  ALT  QUAL  FILTER  INFO            ...
chr1    100  .   A    G    35    PASS    DP=20;AC=1;AN=2 ...

Lines starting with "#" are metadata or the column header and are never
parsed as records. A body line with fewer than 8 columns or a position that
is not a positive integer is malformed: it is counted and skipped.
"""

import logging
from collections.abc import Iterator
from pathlib import Path

from hq_variants.config import VCF_SUFFIX
from hq_variants.io_utils import smart_open
from hq_variants.models import InfoFields, SampleStatistics, VariantRecord
from hq_variants.utils import MISSING, parse_number, parse_position

logger = logging.getLogger(__name__)

HEADER_PREFIX = "#"
MIN_COLUMNS = 8


def parse_info(text: str) -> InfoFields:
    """Parse a VCF INFO column.

    Tokens are separated by ";". A token "key=value" is split on its first
    "="; a token without "=" is a flag with an empty value. Within one
    record the first occurrence of a key wins.

    Args:
        text: INFO column text

    Returns:
        Typed INFO fields

    Example:
        >>> info = parse_info("DP=20;AC=0.1;AN=2;INDEL")
        >>> info.depth, info.allele_count, info.get("INDEL")
        (20.0, 0.1, '')
    """
    raw: dict[str, str] = {}
    if text and text != MISSING:
        for token in text.split(";"):
            if not token:
                continue
            key, _, value = token.partition("=")
            if key not in raw:
                raw[key] = value
    return InfoFields.from_raw(raw)


def parse_record(line: str, sample_id: str) -> VariantRecord | None:
    """Parse one VCF body line.

    Args:
        line: Body line without trailing newline (must not be a header line)
        sample_id: Sample identifier to attach to the record

    Returns:
        VariantRecord, or None if the line is malformed
    """
    parts = line.split("\t")
    if len(parts) < MIN_COLUMNS:
        return None

    pos = parse_position(parts[1])
    if pos is None:
        return None

    return VariantRecord(
        chrom=parts[0],
        pos=pos,
        id=parts[2],
        ref=parts[3],
        alt=parts[4],
        quality=parse_number(parts[5]),
        filter=parts[6],
        info=parse_info(parts[7]),
        sample_id=sample_id,
        line=line,
    )


def iter_records(
    filepath: Path,
    sample_id: str,
    stats: SampleStatistics | None = None,
) -> Iterator[VariantRecord]:
    """Stream records from a VCF file.

    This is a generator that yields one record at a time; per-sample files
    are never loaded into memory.

    Args:
        filepath: Path to VCF file (gzipped or plain)
        sample_id: Sample identifier attached to every record
        stats: Optional statistics updated with records_read and malformed

    Yields:
        VariantRecord for each well-formed body line

    Raises:
        FileNotFoundError: If file doesn't exist
    """
    if not filepath.exists():
        raise FileNotFoundError(f"VCF file not found: {filepath}")

    with smart_open(filepath) as f:
        for line_num, line in enumerate(f, 1):
            line = line.rstrip("\r\n")
            if not line or line.startswith(HEADER_PREFIX):
                continue

            if stats is not None:
                stats.records_read += 1

            record = parse_record(line, sample_id)
            if record is None:
                if stats is not None:
                    stats.malformed += 1
                logger.debug("%s: skipping malformed line %d", filepath.name, line_num)
                continue

            yield record


def iter_header(filepath: Path) -> Iterator[str]:
    """Yield the metadata and column-header lines of a VCF file.

    Reading stops at the first body line.

    Args:
        filepath: Path to VCF file (gzipped or plain)

    Yields:
        Header lines without trailing newline
    """
    with smart_open(filepath) as f:
        for line in f:
            line = line.rstrip("\r\n")
            if not line:
                continue
            if not line.startswith(HEADER_PREFIX):
                break
            yield line


def sample_id_from_path(filepath: Path, suffix: str = VCF_SUFFIX) -> str:
    """Derive a sample identifier from a filename.

    Args:
        filepath: File named <sample_id><suffix>
        suffix: Suffix to strip (e.g. ".vcf.gz", "_filtered.vcf.gz", "_hq.tsv")

    Returns:
        Sample identifier

    Raises:
        ValueError: If the filename does not end with suffix

    Example:
        >>> sample_id_from_path(Path("results/S1_filtered.vcf.gz"), "_filtered.vcf.gz")
        'S1'
    """
    name = filepath.name
    if not name.endswith(suffix) or len(name) == len(suffix):
        raise ValueError(f"Cannot derive sample ID from {name!r}: expected *{suffix}")
    return name[: -len(suffix)]
