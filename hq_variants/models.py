"""Data models for the high-quality variant pipeline.

Records move through the pipeline as frozen dataclasses: a VariantRecord is
parsed from one VCF body line, survives the quality filter unchanged, and is
turned into an AnnotatedRow once its allele frequency can be derived.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from hq_variants.utils import format_number, parse_number

# INFO keys the pipeline reads
DEPTH_KEY = "DP"
ALLELE_COUNT_KEY = "AC"
ALLELE_NUMBER_KEY = "AN"

# Column order of per-sample and merged tables
HQ_COLUMNS: tuple[str, ...] = ("CHROM", "POS", "REF", "ALT", "QUAL", "DP", "AF", "SAMPLE_ID")
HQ_HEADER = "\t".join(HQ_COLUMNS)


class SubstitutionClass(str, Enum):
    """Biological category of a (reference, alternate) allele pair."""

    TRANSITION = "Transition"
    TRANSVERSION = "Transversion"
    OTHER = "Other"


@dataclass(frozen=True, slots=True)
class InfoFields:
    """Typed view of a record's INFO column.

    Attributes:
        raw: Key to raw string value; flags map to ""
        depth: INFO DP, or None if absent or non-numeric
        allele_count: INFO AC, or None if absent or non-numeric
        allele_number: INFO AN, or None if absent or non-numeric
    """

    raw: Mapping[str, str] = field(default_factory=dict)
    depth: float | None = None
    allele_count: float | None = None
    allele_number: float | None = None

    @classmethod
    def from_raw(cls, raw: Mapping[str, str]) -> "InfoFields":
        """Build typed fields from a raw key/value mapping."""
        return cls(
            raw=dict(raw),
            depth=parse_number(raw.get(DEPTH_KEY)),
            allele_count=parse_number(raw.get(ALLELE_COUNT_KEY)),
            allele_number=parse_number(raw.get(ALLELE_NUMBER_KEY)),
        )

    def has(self, key: str) -> bool:
        """Whether key is present, regardless of its value."""
        return key in self.raw

    def get(self, key: str) -> str | None:
        """Raw value for key, or None if absent."""
        return self.raw.get(key)


@dataclass(frozen=True, slots=True)
class VariantRecord:
    """One body line of a VCF file.

    Attributes:
        chrom: Chromosome name as written in the file
        pos: 1-based position
        id: Variant identifier column
        ref: Reference allele
        alt: Alternate allele (column text, may list several alleles)
        quality: QUAL score, or None if "." or non-numeric
        filter: FILTER column
        info: Typed INFO fields
        sample_id: Sample identifier taken from the source filename
        line: Original line text without the trailing newline
    """

    chrom: str
    pos: int
    id: str
    ref: str
    alt: str
    quality: float | None
    filter: str
    info: InfoFields
    sample_id: str
    line: str = ""


@dataclass(frozen=True, slots=True)
class AnnotatedRow:
    """A high-quality variant row with derived allele frequency."""

    chrom: str
    pos: int
    ref: str
    alt: str
    quality: float
    depth: int
    allele_frequency: float
    sample_id: str

    def to_fields(self) -> list[str]:
        """Row values in table column order."""
        return [
            self.chrom,
            str(self.pos),
            self.ref,
            self.alt,
            format_number(self.quality),
            str(self.depth),
            format_number(self.allele_frequency),
            self.sample_id,
        ]

    def to_line(self) -> str:
        """Tab-separated row without the trailing newline."""
        return "\t".join(self.to_fields())


@dataclass
class SampleStatistics:
    """Running counters for one sample.

    Malformed lines, filter failures and incomplete annotations are counted
    separately so that each exclusion path stays visible in the report.
    """

    sample_id: str

    # Parsing
    records_read: int = 0
    malformed: int = 0

    # Quality filter
    passed_filter: int = 0
    failed_filter: int = 0
    failed_quality: int = 0
    failed_depth: int = 0
    failed_allele_count: int = 0

    # Metric derivation
    incomplete_annotation: int = 0
    emitted: int = 0

    index_built: bool = False
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        """Whether the sample was processed without a fatal error."""
        return self.error is None


@dataclass
class MergeResult:
    """Outcome of merging per-sample tables.

    Attributes:
        output_path: Merged table path
        samples: Sample IDs merged, in output order
        rows_per_sample: Data rows contributed by each merged sample
        missing: Sample IDs whose table was absent
    """

    output_path: str
    samples: list[str] = field(default_factory=list)
    rows_per_sample: dict[str, int] = field(default_factory=dict)
    missing: list[str] = field(default_factory=list)

    @property
    def total_rows(self) -> int:
        """Total data rows in the merged table."""
        return sum(self.rows_per_sample.values())
