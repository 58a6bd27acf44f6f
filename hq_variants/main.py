"""Main orchestration for the high-quality variant pipeline.

Implements run_pipeline(), which coordinates all components:

1. Discover per-sample VCFs (<sample_id>.vcf.gz)
2. Per sample, in parallel:
   - Quality filter -> <sample_id>_filtered.vcf.gz (+ .tbi)
   - Allele frequency extraction -> <sample_id>_hq.tsv
3. Merge per-sample tables -> hq_allvariants.tsv
4. Classify substitutions and write summary tables
5. Write JSON report
"""

import logging
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table

from hq_variants.config import FILTERED_SUFFIX, VCF_SUFFIX, Config
from hq_variants.exceptions import ConfigurationError, NoSamplesError
from hq_variants.merge import merge_tables
from hq_variants.metrics import derive_row
from hq_variants.models import MergeResult, SampleStatistics
from hq_variants.parsers.vcf import iter_records, sample_id_from_path
from hq_variants.summary import SummaryTables, summarize, write_summary
from hq_variants.writers.filtered_vcf import write_filtered_vcf
from hq_variants.writers.hq_table import HqTableWriter
from hq_variants.writers.report import ReportWriter

logger = logging.getLogger(__name__)

console = Console()


@dataclass
class PipelineResult:
    """Everything a pipeline run produced."""

    samples: list[SampleStatistics] = field(default_factory=list)
    merge: MergeResult | None = None
    summary: SummaryTables | None = None
    output_files: list[Path] = field(default_factory=list)
    report_file: Path | None = None

    @property
    def failed_samples(self) -> list[str]:
        """Sample IDs that could not be processed."""
        return [s.sample_id for s in self.samples if not s.succeeded]


def discover_samples(input_dir: Path) -> list[str]:
    """Find sample IDs from <sample_id>.vcf.gz files in a directory.

    Files produced by the filter step (*_filtered.vcf.gz) are never inputs.

    Returns:
        Sample IDs in lexicographic order
    """
    samples = []
    for path in sorted(input_dir.glob(f"*{VCF_SUFFIX}")):
        if path.name.endswith(FILTERED_SUFFIX) or not path.is_file():
            continue
        samples.append(sample_id_from_path(path, VCF_SUFFIX))
    return samples


def filter_sample(sample_id: str, config: Config, stats: SampleStatistics) -> Path:
    """Apply the quality filter to one sample's VCF.

    Returns:
        Path to the filtered VCF
    """
    output_path = config.filtered_vcf(sample_id)
    stats.index_built = write_filtered_vcf(
        source=config.input_vcf(sample_id),
        output_path=output_path,
        sample_id=sample_id,
        thresholds=config.thresholds,
        stats=stats,
        build_index=config.build_index,
    )
    return output_path


def extract_sample(sample_id: str, config: Config, stats: SampleStatistics) -> Path:
    """Derive allele frequencies from a filtered VCF and write the sample table.

    Records whose annotation is incomplete (missing or non-numeric DP/AC/AN,
    or AN = 0) produce no row.

    Returns:
        Path to the per-sample table
    """
    table_path = config.hq_table(sample_id)
    with HqTableWriter(table_path) as writer:
        for record in iter_records(config.filtered_vcf(sample_id), sample_id):
            row = derive_row(record)
            if row is None:
                stats.incomplete_annotation += 1
                continue
            writer.write_row(row)
    stats.emitted = writer.row_count

    logger.info(
        "%s: %d high-quality variants, %d dropped for incomplete annotation",
        sample_id,
        stats.emitted,
        stats.incomplete_annotation,
    )
    return table_path


def process_sample(sample_id: str, config: Config) -> SampleStatistics:
    """Filter and extract one sample.

    Runs in a worker process. A sample that cannot be read (missing or
    corrupt input) is recorded as failed rather than raised, so other
    samples are unaffected. Its filtered VCF, index and table from an
    earlier run are removed so no stale output outlives the failure.

    Returns:
        Statistics for the sample
    """
    stats = SampleStatistics(sample_id=sample_id)
    try:
        filter_sample(sample_id, config, stats)
        extract_sample(sample_id, config, stats)
    except (OSError, EOFError, ValueError) as e:
        stats.error = f"{type(e).__name__}: {e}"
        logger.error("%s: processing failed: %s", sample_id, stats.error)
        for stale in (
            config.filtered_vcf(sample_id),
            config.filtered_index(sample_id),
            config.hq_table(sample_id),
        ):
            stale.unlink(missing_ok=True)
    return stats


def run_samples(sample_ids: list[str], config: Config) -> list[SampleStatistics]:
    """Process samples, in parallel when more than one worker is configured.

    Returns:
        Statistics in sample ID order
    """
    results: dict[str, SampleStatistics] = {}
    workers = config.resolve_workers(len(sample_ids))

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        disable=not sample_ids,
    ) as progress:
        task = progress.add_task("Filtering samples...", total=len(sample_ids))

        if workers == 1:
            for sample_id in sample_ids:
                results[sample_id] = process_sample(sample_id, config)
                progress.advance(task)
        else:
            with ProcessPoolExecutor(max_workers=workers) as executor:
                futures = {
                    executor.submit(process_sample, sample_id, config): sample_id
                    for sample_id in sample_ids
                }
                for future in as_completed(futures):
                    stats = future.result()
                    results[stats.sample_id] = stats
                    progress.advance(task)

    return [results[sample_id] for sample_id in sorted(results)]


def run_pipeline(config: Config) -> PipelineResult:
    """Run the full filter, extract, merge and summarize pipeline.

    Args:
        config: Configuration with directories and thresholds

    Returns:
        PipelineResult describing the run

    Raises:
        ConfigurationError: If the configuration is invalid
        NoSamplesError: If no per-sample VCF is found
    """
    errors = config.validate()
    if errors:
        raise ConfigurationError("; ".join(errors))

    assert config.output_dir is not None  # Set in Config.__post_init__
    config.output_dir.mkdir(parents=True, exist_ok=True)

    report_writer = ReportWriter(config) if config.generate_report else None

    # Step 1: Discover samples
    if config.samples:
        sample_ids = sorted(set(config.samples))
    else:
        sample_ids = discover_samples(config.input_dir)
    if not sample_ids:
        raise NoSamplesError(f"No *{VCF_SUFFIX} files found in {config.input_dir}")

    console.print(f"Samples found:               {len(sample_ids)}")
    logger.info("Processing %d samples: %s", len(sample_ids), ", ".join(sample_ids))

    # Step 2: Per-sample filter and extraction
    result = PipelineResult()
    result.samples = run_samples(sample_ids, config)
    for stats in result.samples:
        if stats.succeeded:
            result.output_files.append(config.filtered_vcf(stats.sample_id))
            if stats.index_built:
                result.output_files.append(config.filtered_index(stats.sample_id))
            result.output_files.append(config.hq_table(stats.sample_id))
        if report_writer:
            report_writer.add_sample(stats)

    # Step 3: Merge
    tables = {sample_id: config.hq_table(sample_id) for sample_id in sample_ids}
    result.merge = merge_tables(tables, config.merged_table)
    result.output_files.append(config.merged_table)

    # Step 4: Summaries
    if config.generate_summary:
        result.summary = summarize(config.merged_table)
        result.output_files.extend(write_summary(result.summary, config.output_dir))

    # Step 5: JSON report
    if report_writer and config.report_file:
        report_writer.write(config.report_file, result.merge, result.output_files)
        result.report_file = config.report_file

    return result


def print_summary(result: PipelineResult) -> None:
    """Print per-sample statistics and variant type proportions."""
    table = Table(title="High-quality variants per sample")
    table.add_column("Sample")
    table.add_column("Records", justify="right")
    table.add_column("Malformed", justify="right")
    table.add_column("Failed filter", justify="right")
    table.add_column("Incomplete", justify="right")
    table.add_column("HQ", justify="right")

    for stats in result.samples:
        hq = f"{stats.emitted:,}" if stats.succeeded else "[red]failed[/red]"
        table.add_row(
            stats.sample_id,
            f"{stats.records_read:,}",
            f"{stats.malformed:,}",
            f"{stats.failed_filter:,}",
            f"{stats.incomplete_annotation:,}",
            hq,
        )
    console.print(table)

    if result.summary is not None:
        types = Table(title="Variant types per sample")
        types.add_column("Sample")
        types.add_column("Variant type")
        types.add_column("Count", justify="right")
        types.add_column("Proportion (%)", justify="right")
        for sample in result.summary.samples():
            for variant_type, count in sample.counts.items():
                types.add_row(
                    sample.sample_id,
                    variant_type,
                    f"{count:,}",
                    f"{sample.proportions[variant_type]:.1f}",
                )
        console.print(types)

    if result.merge is not None:
        console.print(f"\nMerged table: {result.merge.output_path} ({result.merge.total_rows:,} rows)")
        if result.merge.missing:
            console.print(
                f"[yellow]Warning:[/yellow] left out of merge: {', '.join(result.merge.missing)}"
            )
    if result.report_file is not None:
        console.print(f"Report file:  {result.report_file}")
