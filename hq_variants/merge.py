"""Multi-sample merge of high-quality variant tables.

Concatenates per-sample tables into one table with a single header. Samples
are written in lexicographic order of sample ID and rows keep their order
within a sample, so merging the same set of tables always produces the same
bytes. Row contents are copied as-is.

The merged table is rebuilt from scratch on every call and published with an
atomic rename; a concurrent reader sees either the previous table or the new
one, never a partial merge.
"""

import logging
from collections.abc import Mapping
from pathlib import Path

from hq_variants.config import HQ_TABLE_SUFFIX
from hq_variants.io_utils import atomic_write
from hq_variants.models import HQ_HEADER, MergeResult
from hq_variants.parsers.table import iter_table_rows, read_table_header
from hq_variants.parsers.vcf import sample_id_from_path

logger = logging.getLogger(__name__)


def discover_tables(directory: Path, exclude: Path | None = None) -> dict[str, Path]:
    """Find per-sample tables (<sample_id>_hq.tsv) in a directory.

    Args:
        directory: Directory to scan
        exclude: Path to leave out (e.g. the merged table itself)

    Returns:
        Mapping of sample ID to table path
    """
    tables: dict[str, Path] = {}
    for path in sorted(directory.glob(f"*{HQ_TABLE_SUFFIX}")):
        if exclude is not None and path.resolve() == exclude.resolve():
            continue
        if not path.is_file():
            continue
        tables[sample_id_from_path(path, HQ_TABLE_SUFFIX)] = path
    return tables


def merge_tables(tables: Mapping[str, Path], output_path: Path) -> MergeResult:
    """Merge per-sample tables into one table.

    A sample whose table is missing is logged and skipped; the remaining
    samples are still merged. With no rows at all the output holds only the
    header line.

    Args:
        tables: Mapping of sample ID to per-sample table path
        output_path: Merged table path

    Returns:
        MergeResult describing what was merged
    """
    result = MergeResult(output_path=str(output_path))

    with atomic_write(output_path) as out:
        out.write(HQ_HEADER + "\n")

        for sample_id in sorted(tables):
            path = tables[sample_id]
            if not path.is_file():
                logger.error("%s: table not found, sample left out of merge: %s", sample_id, path)
                result.missing.append(sample_id)
                continue

            header = read_table_header(path)
            if header is not None and header != HQ_HEADER:
                logger.warning("%s: unexpected table header in %s: %r", sample_id, path, header)

            n_rows = 0
            for row in iter_table_rows(path):
                out.write(row + "\n")
                n_rows += 1

            result.samples.append(sample_id)
            result.rows_per_sample[sample_id] = n_rows
            logger.debug("%s: merged %d rows", sample_id, n_rows)

    if result.total_rows == 0:
        logger.warning("No high-quality variants in any sample; %s holds only a header", output_path)
    else:
        logger.info(
            "Merged %d rows from %d samples into %s",
            result.total_rows,
            len(result.samples),
            output_path,
        )
    return result
