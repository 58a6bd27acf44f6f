"""Allele frequency derivation for filtered records.

A filtered record becomes an AnnotatedRow only when DP, AC and AN are all
present and numeric, DP is a whole number and AN is non-zero. Anything else
is an incomplete annotation: the record is dropped without a placeholder row.
"""

from hq_variants.models import AnnotatedRow, VariantRecord


def allele_frequency(allele_count: float | None, allele_number: float | None) -> float | None:
    """Compute AC / AN with a divide-by-zero guard.

    The ratio is not clamped: AC > AN yields a value above 1.

    Returns:
        The allele frequency, or None if either input is missing or AN is 0

    Example:
        >>> allele_frequency(0.1, 2.0)
        0.05
        >>> allele_frequency(1.0, 0.0) is None
        True
    """
    if allele_count is None or allele_number is None or allele_number == 0:
        return None
    return allele_count / allele_number


def derive_row(record: VariantRecord) -> AnnotatedRow | None:
    """Build the high-quality table row for a filtered record.

    Args:
        record: Record that passed the quality filter

    Returns:
        AnnotatedRow, or None if the annotation is incomplete
    """
    info = record.info
    if info.depth is None or not info.depth.is_integer():
        return None
    if record.quality is None:
        return None

    af = allele_frequency(info.allele_count, info.allele_number)
    if af is None:
        return None

    return AnnotatedRow(
        chrom=record.chrom,
        pos=record.pos,
        ref=record.ref,
        alt=record.alt,
        quality=record.quality,
        depth=int(info.depth),
        allele_frequency=af,
        sample_id=record.sample_id,
    )
