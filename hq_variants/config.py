"""Configuration dataclasses for the high-quality variant pipeline.

Every path the pipeline reads or writes is derived from a Config instance,
so per-sample tasks receive everything they need as explicit arguments.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

# Input and artifact naming
VCF_SUFFIX = ".vcf.gz"
FILTERED_SUFFIX = "_filtered.vcf.gz"
INDEX_SUFFIX = ".tbi"
HQ_TABLE_SUFFIX = "_hq.tsv"

MERGED_FILENAME = "hq_allvariants.tsv"
COUNTS_FILENAME = "hq_counts_per_sample.tsv"
PROPORTIONS_FILENAME = "variant_type_proportions.tsv"
SUBSTITUTIONS_FILENAME = "substitution_counts.tsv"
REPORT_FILENAME = "hq_variants-report.json"


@dataclass(frozen=True)
class QualityThresholds:
    """Inclusion thresholds for the quality filter.

    A record passes only when QUAL >= min_quality, INFO DP >= min_depth and
    INFO AC >= min_allele_count. The AC threshold is compared against the raw
    allele-count value, not against allele frequency.

    Attributes:
        min_quality: Minimum QUAL score (default 30)
        min_depth: Minimum INFO DP (default 10)
        min_allele_count: Minimum INFO AC (default 0.05)
    """

    min_quality: float = 30.0
    min_depth: float = 10.0
    min_allele_count: float = 0.05

    def expression(self) -> str:
        """Exclusion expression in bcftools syntax, recorded in filtered VCF headers."""
        return (
            f"QUAL<{self.min_quality:g} || DP<{self.min_depth:g} "
            f"|| AC<{self.min_allele_count:g}"
        )


@dataclass
class Config:
    """Configuration for a pipeline run.

    Attributes:
        input_dir: Directory holding <sample_id>.vcf.gz files
        output_dir: Directory for all generated files (default: input_dir)
        thresholds: Quality filter thresholds
        samples: Restrict the run to these sample IDs (default: all discovered)
        merged_filename: Name of the merged high-quality table
        max_workers: Parallel per-sample workers (default: min(cpu_count, samples))
        build_index: Build a tabix index next to each filtered VCF
        generate_summary: Write per-sample summary tables
        generate_report: Write the JSON run report
        report_file: Path of the JSON report (default: {output_dir}/hq_variants-report.json)
        verbose: Enable verbose logging
    """

    input_dir: Path
    output_dir: Path | None = None

    thresholds: QualityThresholds = field(default_factory=QualityThresholds)
    samples: list[str] | None = None

    merged_filename: str = MERGED_FILENAME
    max_workers: int | None = None

    # Behavior flags
    build_index: bool = True
    generate_summary: bool = True
    generate_report: bool = True
    report_file: Path | None = None
    verbose: bool = False

    def __post_init__(self) -> None:
        """Normalize paths and set defaults."""
        if isinstance(self.input_dir, str):
            self.input_dir = Path(self.input_dir)

        if self.output_dir is None:
            self.output_dir = self.input_dir
        elif isinstance(self.output_dir, str):
            self.output_dir = Path(self.output_dir)

        if self.report_file is None and self.generate_report:
            self.report_file = self.output_dir / REPORT_FILENAME
        elif isinstance(self.report_file, str):
            self.report_file = Path(self.report_file)

    def get_output_path(self, filename: str) -> Path:
        """Get full output path for a file.

        Args:
            filename: Name of the output file

        Returns:
            Full path to the output file
        """
        assert self.output_dir is not None  # Set in __post_init__
        return self.output_dir / filename

    def input_vcf(self, sample_id: str) -> Path:
        """Path of the raw per-sample VCF."""
        return self.input_dir / f"{sample_id}{VCF_SUFFIX}"

    def filtered_vcf(self, sample_id: str) -> Path:
        """Path of the quality-filtered per-sample VCF."""
        return self.get_output_path(f"{sample_id}{FILTERED_SUFFIX}")

    def filtered_index(self, sample_id: str) -> Path:
        """Path of the tabix index for the filtered VCF."""
        return self.get_output_path(f"{sample_id}{FILTERED_SUFFIX}{INDEX_SUFFIX}")

    def hq_table(self, sample_id: str) -> Path:
        """Path of the per-sample high-quality variant table."""
        return self.get_output_path(f"{sample_id}{HQ_TABLE_SUFFIX}")

    @property
    def merged_table(self) -> Path:
        """Path of the merged high-quality variant table."""
        return self.get_output_path(self.merged_filename)

    def resolve_workers(self, n_samples: int) -> int:
        """Number of worker processes to use for n_samples samples."""
        if self.max_workers is not None:
            return self.max_workers
        return max(1, min(os.cpu_count() or 1, n_samples))

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors.

        Returns:
            List of error messages (empty if valid)
        """
        errors: list[str] = []

        if not self.input_dir.is_dir():
            errors.append(f"Input directory not found: {self.input_dir}")

        if self.output_dir is not None and self.output_dir.exists() and not self.output_dir.is_dir():
            errors.append(f"Output path is not a directory: {self.output_dir}")

        if self.thresholds.min_quality < 0:
            errors.append(f"min_quality must be non-negative: {self.thresholds.min_quality}")

        if self.thresholds.min_depth < 0:
            errors.append(f"min_depth must be non-negative: {self.thresholds.min_depth}")

        if self.thresholds.min_allele_count < 0:
            errors.append(
                f"min_allele_count must be non-negative: {self.thresholds.min_allele_count}"
            )

        if self.max_workers is not None and self.max_workers < 1:
            errors.append(f"max_workers must be at least 1: {self.max_workers}")

        if not self.merged_filename or "/" in self.merged_filename:
            errors.append(f"Invalid merged table filename: {self.merged_filename!r}")

        return errors
