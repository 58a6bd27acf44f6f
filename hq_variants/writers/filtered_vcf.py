"""Quality-filtered VCF writer.

Output files (one set per sample, overwritten on every run):
- <sample_id>_filtered.vcf.gz     - BGZF-compressed VCF with passing records only
- <sample_id>_filtered.vcf.gz.tbi - tabix index for positional lookup

Header lines are copied from the source file, with one extra metadata line
recording the exclusion expression placed just before #CHROM. Passing records
are copied verbatim.
"""

import logging
import os
from pathlib import Path

import pysam

from hq_variants.config import INDEX_SUFFIX, QualityThresholds
from hq_variants.filtering import record_filter_outcome
from hq_variants.models import SampleStatistics
from hq_variants.parsers.vcf import iter_header, iter_records

logger = logging.getLogger(__name__)

COLUMN_HEADER_PREFIX = "#CHROM"
FILTER_COMMAND_KEY = "hq_variantsFilterCommand"


def filter_header_lines(source: Path, thresholds: QualityThresholds) -> list[str]:
    """Header lines for the filtered VCF.

    Args:
        source: Source VCF
        thresholds: Thresholds used for filtering

    Returns:
        Source header lines plus the filter command line
    """
    command = f"##{FILTER_COMMAND_KEY}=exclude '{thresholds.expression()}'"
    lines: list[str] = []
    inserted = False
    for line in iter_header(source):
        if line.startswith(COLUMN_HEADER_PREFIX) and not inserted:
            lines.append(command)
            inserted = True
        lines.append(line)
    if not inserted:
        lines.append(command)
    return lines


def write_filtered_vcf(
    source: Path,
    output_path: Path,
    sample_id: str,
    thresholds: QualityThresholds,
    stats: SampleStatistics,
    build_index: bool = True,
) -> bool:
    """Write the passing records of a VCF to a compressed, indexed VCF.

    Compression and indexing happen on temporary files in the output
    directory; the results are renamed into place once complete. A failed
    index build (for example on unsorted input) is logged and leaves the
    sample without an index.

    Args:
        source: Input VCF (gzipped or plain)
        output_path: Filtered VCF path (.vcf.gz)
        sample_id: Sample identifier
        thresholds: Filter thresholds
        stats: Statistics updated with parse and filter counters
        build_index: Build a tabix index next to the output

    Returns:
        True if an index was built
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)

    tmp_plain = output_path.with_name(f".{output_path.name}.{os.getpid()}.vcf")
    tmp_gz = Path(f"{tmp_plain}.gz")
    tmp_index = Path(f"{tmp_gz}{INDEX_SUFFIX}")
    index_path = Path(f"{output_path}{INDEX_SUFFIX}")

    try:
        with open(tmp_plain, "w", encoding="utf-8") as out:
            for line in filter_header_lines(source, thresholds):
                out.write(line + "\n")
            for record in iter_records(source, sample_id, stats):
                if record_filter_outcome(record, thresholds, stats):
                    out.write(record.line + "\n")

        pysam.tabix_compress(str(tmp_plain), str(tmp_gz), force=True)

        index_built = False
        if build_index:
            try:
                pysam.tabix_index(str(tmp_gz), preset="vcf", force=True)
                index_built = True
            except OSError as e:
                logger.warning("%s: tabix index not built: %s", sample_id, e)

        os.replace(tmp_gz, output_path)
        if index_built:
            os.replace(tmp_index, index_path)
        else:
            # Never leave an index from a previous run next to a new file
            index_path.unlink(missing_ok=True)
    finally:
        for leftover in (tmp_plain, tmp_gz, tmp_index):
            leftover.unlink(missing_ok=True)

    logger.info(
        "%s: %d of %d records passed the quality filter",
        sample_id,
        stats.passed_filter,
        stats.records_read - stats.malformed,
    )
    return index_built
