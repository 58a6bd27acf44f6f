"""Per-sample summaries of the merged high-quality variant table.

Classifies every row as Transition, Transversion or Other and aggregates:

- hq_counts_per_sample.tsv     SAMPLE_ID, N_HQ
- variant_type_proportions.tsv SAMPLE_ID, VARIANT_TYPE, COUNT, PROP
- substitution_counts.tsv      VARIANT_TYPE, SUBSTITUTION, N

Proportions are percentages of the sample's total. Categories a sample has no
rows for are absent from its output rather than zero-filled. Summaries are
always recomputed from the full merged table.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import pandas as pd

from hq_variants.classify import classify_substitution, substitution_label
from hq_variants.config import COUNTS_FILENAME, PROPORTIONS_FILENAME, SUBSTITUTIONS_FILENAME
from hq_variants.io_utils import atomic_write
from hq_variants.models import HQ_COLUMNS

logger = logging.getLogger(__name__)

STRING_COLUMNS = {"CHROM": str, "REF": str, "ALT": str, "SAMPLE_ID": str}


@dataclass
class SampleSummary:
    """Summary for one sample.

    Attributes:
        sample_id: Sample identifier
        total: Number of high-quality variants
        counts: Variant type to count (only types present)
        proportions: Variant type to percentage of total
    """

    sample_id: str
    total: int
    counts: dict[str, int] = field(default_factory=dict)
    proportions: dict[str, float] = field(default_factory=dict)


@dataclass
class SummaryTables:
    """All summary tables computed from one merged table."""

    counts: pd.DataFrame
    proportions: pd.DataFrame
    substitutions: pd.DataFrame

    def samples(self) -> list[SampleSummary]:
        """Per-sample summaries in sample ID order."""
        summaries = {
            row.SAMPLE_ID: SampleSummary(sample_id=row.SAMPLE_ID, total=int(row.N_HQ))
            for row in self.counts.itertuples(index=False)
        }
        for row in self.proportions.itertuples(index=False):
            summary = summaries[row.SAMPLE_ID]
            summary.counts[row.VARIANT_TYPE] = int(row.COUNT)
            summary.proportions[row.VARIANT_TYPE] = float(row.PROP)
        return [summaries[sid] for sid in sorted(summaries)]


def load_unified_table(filepath: Path) -> pd.DataFrame:
    """Read the merged table.

    Allele and identifier columns are kept as strings, and no value is
    coerced to NaN.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If expected columns are missing
    """
    if not filepath.exists():
        raise FileNotFoundError(f"Merged table not found: {filepath}")

    df = pd.read_csv(filepath, sep="\t", dtype=STRING_COLUMNS, keep_default_na=False)

    missing = [col for col in HQ_COLUMNS if col not in df.columns]
    if missing:
        raise ValueError(f"{filepath} is missing columns: {', '.join(missing)}")
    return df


def annotate(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy with VARIANT_TYPE and SUBSTITUTION columns added."""
    annotated = df.copy()
    pairs = list(zip(annotated["REF"], annotated["ALT"]))
    annotated["VARIANT_TYPE"] = [classify_substitution(ref, alt).value for ref, alt in pairs]
    annotated["SUBSTITUTION"] = [substitution_label(ref, alt) for ref, alt in pairs]
    return annotated


def count_per_sample(df: pd.DataFrame) -> pd.DataFrame:
    """Number of high-quality variants per sample."""
    return (df.groupby("SAMPLE_ID")
            .size()
            .reset_index(name="N_HQ")
            .sort_values("SAMPLE_ID", kind="mergesort")
            .reset_index(drop=True))


def variant_type_proportions(annotated: pd.DataFrame) -> pd.DataFrame:
    """Count and percentage of each variant type within each sample."""
    counts = (annotated.groupby(["SAMPLE_ID", "VARIANT_TYPE"])
              .size()
              .reset_index(name="COUNT"))
    totals = counts.groupby("SAMPLE_ID")["COUNT"].transform("sum")
    counts["PROP"] = counts["COUNT"] / totals * 100
    return counts.sort_values(["SAMPLE_ID", "VARIANT_TYPE"], kind="mergesort").reset_index(drop=True)


def substitution_counts(annotated: pd.DataFrame) -> pd.DataFrame:
    """Occurrences of each substitution across all samples, most common first."""
    counts = (annotated.groupby(["VARIANT_TYPE", "SUBSTITUTION"])
              .size()
              .reset_index(name="N"))
    return (counts.sort_values(["N", "VARIANT_TYPE", "SUBSTITUTION"],
                               ascending=[False, True, True],
                               kind="mergesort")
            .reset_index(drop=True))


def summarize_frame(df: pd.DataFrame) -> SummaryTables:
    """Compute all summary tables from a merged-table DataFrame."""
    annotated = annotate(df)
    return SummaryTables(
        counts=count_per_sample(annotated),
        proportions=variant_type_proportions(annotated),
        substitutions=substitution_counts(annotated),
    )


def summarize(filepath: Path) -> SummaryTables:
    """Compute all summary tables from the merged table file."""
    df = load_unified_table(filepath)
    logger.info("Summarizing %d high-quality variants from %s", len(df), filepath)
    return summarize_frame(df)


def write_summary(tables: SummaryTables, output_dir: Path) -> list[Path]:
    """Write the summary tables as TSV files, each atomically.

    Returns:
        Paths written
    """
    outputs = [
        (tables.counts, output_dir / COUNTS_FILENAME),
        (tables.proportions, output_dir / PROPORTIONS_FILENAME),
        (tables.substitutions, output_dir / SUBSTITUTIONS_FILENAME),
    ]
    written: list[Path] = []
    for frame, path in outputs:
        with atomic_write(path) as out:
            frame.to_csv(out, sep="\t", index=False)
        written.append(path)
    return written
