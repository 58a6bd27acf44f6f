"""Quality filter for variant records.

A record passes only when all three criteria hold:

    QUAL >= min_quality       (default 30)
    INFO DP >= min_depth      (default 10)
    INFO AC >= min_allele_count (default 0.05)

A missing or non-numeric value fails its criterion. The AC criterion compares
the allele-count field itself against a fractional threshold; it is kept as
written rather than being rewritten as an allele-frequency check.
"""

from hq_variants.config import QualityThresholds
from hq_variants.models import SampleStatistics, VariantRecord

# Criterion names reported by filter_failures()
QUAL = "QUAL"
DP = "DP"
AC = "AC"

DEFAULT_THRESHOLDS = QualityThresholds()


def _at_least(value: float | None, threshold: float) -> bool:
    return value is not None and value >= threshold


def filter_failures(
    record: VariantRecord,
    thresholds: QualityThresholds = DEFAULT_THRESHOLDS,
) -> list[str]:
    """List the criteria a record fails.

    Args:
        record: Parsed variant record
        thresholds: Filter thresholds

    Returns:
        Failed criterion names in QUAL, DP, AC order (empty if the record passes)
    """
    failures: list[str] = []
    if not _at_least(record.quality, thresholds.min_quality):
        failures.append(QUAL)
    if not _at_least(record.info.depth, thresholds.min_depth):
        failures.append(DP)
    if not _at_least(record.info.allele_count, thresholds.min_allele_count):
        failures.append(AC)
    return failures


def passes_quality_filter(
    record: VariantRecord,
    thresholds: QualityThresholds = DEFAULT_THRESHOLDS,
) -> bool:
    """Whether a record passes the quality filter.

    Example:
        >>> from hq_variants.parsers.vcf import parse_record
        >>> rec = parse_record("chr1\\t100\\t.\\tA\\tG\\t35\\tPASS\\tDP=20;AC=0.1;AN=2", "S1")
        >>> passes_quality_filter(rec)
        True
    """
    return not filter_failures(record, thresholds)


def record_filter_outcome(
    record: VariantRecord,
    thresholds: QualityThresholds,
    stats: SampleStatistics,
) -> bool:
    """Evaluate the filter for a record and update per-criterion counters.

    Returns:
        True if the record passes
    """
    failures = filter_failures(record, thresholds)
    if not failures:
        stats.passed_filter += 1
        return True

    stats.failed_filter += 1
    if QUAL in failures:
        stats.failed_quality += 1
    if DP in failures:
        stats.failed_depth += 1
    if AC in failures:
        stats.failed_allele_count += 1
    return False
