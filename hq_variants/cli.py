"""Typer CLI for the high-quality variant pipeline.

Usage:
    # Full pipeline over a directory of <sample>.vcf.gz files
    hq-variants run -i results/vcf

    # Separate output directory, 4 workers
    hq-variants run -i results/vcf -o results/hq -j 4

    # Re-merge existing per-sample tables
    hq-variants merge --dir results/hq

    # Recompute summaries from a merged table
    hq-variants summarize --table results/hq/hq_allvariants.tsv
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from hq_variants import __version__
from hq_variants.config import MERGED_FILENAME, QualityThresholds

app = typer.Typer(
    name="hq-variants",
    help="Filter per-sample VCFs, merge high-quality variants and summarize substitutions",
    add_completion=False,
)

console = Console()


def _banner() -> None:
    console.print("\n")
    console.print("[bold]High-Quality Variant Extraction[/bold]", style="blue")
    console.print(f"hq-variants v{__version__}\n")


@app.command()
def run(
    input_dir: Annotated[
        Path,
        typer.Option(
            "--input-dir", "-i",
            help="Directory containing <sample>.vcf.gz files",
            exists=True,
            file_okay=False,
            dir_okay=True,
            readable=True,
        ),
    ],
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output-dir", "-o",
            help="Output directory (default: input directory)",
            file_okay=False,
            dir_okay=True,
        ),
    ] = None,
    min_qual: Annotated[
        float,
        typer.Option("--min-qual", help="Minimum QUAL score", min=0.0),
    ] = 30.0,
    min_depth: Annotated[
        float,
        typer.Option("--min-depth", help="Minimum INFO DP", min=0.0),
    ] = 10.0,
    min_ac: Annotated[
        float,
        typer.Option("--min-ac", help="Minimum INFO AC (compared to the raw allele count)", min=0.0),
    ] = 0.05,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers", "-j",
            help="Parallel per-sample workers (default: CPU count)",
            min=1,
        ),
    ] = None,
    samples: Annotated[
        list[str] | None,
        typer.Option(
            "--sample", "-s",
            help="Process only this sample ID (repeatable)",
        ),
    ] = None,
    no_index: Annotated[
        bool,
        typer.Option("--no-index", help="Skip tabix indexing of filtered VCFs"),
    ] = False,
    no_summary: Annotated[
        bool,
        typer.Option("--no-summary", help="Skip writing summary tables"),
    ] = False,
    no_report: Annotated[
        bool,
        typer.Option("--no-report", help="Skip generating JSON report"),
    ] = False,
    report_file: Annotated[
        Path | None,
        typer.Option(
            "--report-file",
            help="Path for JSON report file (default: hq_variants-report.json)",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging"),
    ] = False,
) -> None:
    """Run the full pipeline: filter, extract, merge and summarize.

    For every <sample>.vcf.gz in the input directory:

    1. Keep records with QUAL >= 30, DP >= 10 and AC >= 0.05
       -> <sample>_filtered.vcf.gz (+ .tbi)
    2. Compute AF = AC/AN for records with DP, AC and AN (AN != 0)
       -> <sample>_hq.tsv

    Then merge all samples into hq_allvariants.tsv and write per-sample
    transition/transversion summaries.
    """
    from hq_variants.config import Config
    from hq_variants.exceptions import HqVariantsError
    from hq_variants.logging_config import setup_logging
    from hq_variants.main import print_summary, run_pipeline

    _banner()

    config = Config(
        input_dir=input_dir,
        output_dir=output_dir,
        thresholds=QualityThresholds(
            min_quality=min_qual,
            min_depth=min_depth,
            min_allele_count=min_ac,
        ),
        samples=samples or None,
        max_workers=workers,
        build_index=not no_index,
        generate_summary=not no_summary,
        generate_report=not no_report,
        report_file=report_file,
        verbose=verbose,
    )

    console.print("Options Set:")
    console.print(f"Input directory:             {config.input_dir}")
    console.print(f"Output directory:            {config.output_dir}")
    console.print(f"Exclusion expression:        {config.thresholds.expression()}")
    if config.samples:
        console.print(f"Samples:                     {', '.join(config.samples)}")
    if config.max_workers:
        console.print(f"Workers:                     {config.max_workers}")
    if config.generate_report:
        console.print(f"Report file:                 {config.report_file}")
    console.print("")

    assert config.output_dir is not None
    config.output_dir.mkdir(parents=True, exist_ok=True)
    log_file = setup_logging(config.output_dir, verbose=verbose)

    try:
        result = run_pipeline(config)
    except HqVariantsError as e:
        console.print(f"[red]ERROR:[/red] {e}")
        raise typer.Exit(code=1)

    print_summary(result)
    console.print(f"Log file:     {log_file}")

    if result.failed_samples:
        console.print(
            f"\n[yellow]Completed with {len(result.failed_samples)} failed sample(s): "
            f"{', '.join(result.failed_samples)}[/yellow]\n"
        )
    else:
        console.print("\n[green]Pipeline complete![/green]\n")


@app.command()
def merge(
    directory: Annotated[
        Path,
        typer.Option(
            "--dir", "-d",
            help="Directory containing <sample>_hq.tsv tables",
            exists=True,
            file_okay=False,
            dir_okay=True,
            readable=True,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            help=f"Merged table path (default: <dir>/{MERGED_FILENAME})",
        ),
    ] = None,
) -> None:
    """Merge existing per-sample tables into one table with a single header."""
    from hq_variants.logging_config import setup_logging
    from hq_variants.merge import discover_tables, merge_tables

    output_path = output or directory / MERGED_FILENAME
    setup_logging(output_path.parent, job_name="hq_variants_merge")

    try:
        tables = discover_tables(directory, exclude=output_path)
        result = merge_tables(tables, output_path)
    except (OSError, ValueError) as e:
        console.print(f"[red]ERROR:[/red] {e}")
        raise typer.Exit(code=1)

    console.print(
        f"Merged {len(result.samples)} samples, {result.total_rows:,} rows -> {output_path}"
    )


@app.command()
def summarize(
    table: Annotated[
        Path,
        typer.Option(
            "--table", "-t",
            help="Merged high-quality variant table",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output-dir", "-o",
            help="Directory for summary tables (default: next to the table)",
            file_okay=False,
            dir_okay=True,
        ),
    ] = None,
) -> None:
    """Classify substitutions and write per-sample summary tables."""
    from hq_variants.summary import summarize as summarize_table
    from hq_variants.summary import write_summary

    try:
        tables = summarize_table(table)
    except ValueError as e:
        console.print(f"[red]ERROR:[/red] {e}")
        raise typer.Exit(code=1)

    written = write_summary(tables, output_dir or table.parent)
    for sample in tables.samples():
        parts = ", ".join(
            f"{variant_type} {sample.proportions[variant_type]:.1f}%"
            for variant_type in sample.counts
        )
        console.print(f"{sample.sample_id}: {sample.total:,} variants ({parts})")
    for path in written:
        console.print(f"  {path}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
