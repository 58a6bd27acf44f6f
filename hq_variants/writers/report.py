"""JSON report writer for pipeline output.

Creates a JSON report containing run metadata, per-sample statistics and the
merge outcome for audit and reproducibility.
"""

import json
from dataclasses import asdict
from datetime import datetime
from pathlib import Path

from hq_variants import __version__
from hq_variants.config import Config
from hq_variants.io_utils import atomic_write
from hq_variants.models import MergeResult, SampleStatistics


class ReportWriter:
    """Collects per-sample statistics and writes the JSON report.

    Usage:
        writer = ReportWriter(config)
        for stats in sample_results:
            writer.add_sample(stats)
        writer.write(output_path, merge_result, output_files)
    """

    def __init__(self, config: Config) -> None:
        """Initialize report writer.

        Args:
            config: Pipeline configuration
        """
        self.config = config
        self.samples: list[SampleStatistics] = []
        self.start_time = datetime.now()

    def add_sample(self, stats: SampleStatistics) -> None:
        """Add the statistics of one processed sample."""
        self.samples.append(stats)

    def build(
        self,
        merge_result: MergeResult | None,
        output_files: list[Path],
    ) -> dict:
        """Build the JSON-serializable report dictionary.

        Args:
            merge_result: Outcome of the merge step (None if it did not run)
            output_files: Files produced by the run

        Returns:
            Report dictionary
        """
        end_time = datetime.now()
        duration = (end_time - self.start_time).total_seconds()
        thresholds = self.config.thresholds

        metadata = {
            "version": __version__,
            "tool": "hq-variants",
            "timestamp": end_time.isoformat(),
            "duration_seconds": duration,
            "input_dir": str(self.config.input_dir),
            "output_dir": str(self.config.output_dir),
            "thresholds": {
                "min_quality": thresholds.min_quality,
                "min_depth": thresholds.min_depth,
                "min_allele_count": thresholds.min_allele_count,
            },
            "filter_expression": thresholds.expression(),
        }

        samples = sorted(self.samples, key=lambda s: s.sample_id)
        totals = {
            "samples": len(samples),
            "failed_samples": sum(1 for s in samples if not s.succeeded),
            "records_read": sum(s.records_read for s in samples),
            "malformed": sum(s.malformed for s in samples),
            "passed_filter": sum(s.passed_filter for s in samples),
            "failed_filter": sum(s.failed_filter for s in samples),
            "incomplete_annotation": sum(s.incomplete_annotation for s in samples),
            "emitted": sum(s.emitted for s in samples),
        }

        merge = None
        if merge_result is not None:
            merge = asdict(merge_result)
            merge["total_rows"] = merge_result.total_rows

        return {
            "metadata": metadata,
            "statistics": totals,
            "samples": [asdict(s) for s in samples],
            "merge": merge,
            "output_files": [str(f) for f in output_files],
        }

    def write(
        self,
        output_path: Path,
        merge_result: MergeResult | None,
        output_files: list[Path],
    ) -> None:
        """Write complete JSON report atomically.

        Args:
            output_path: Path for JSON report file
            merge_result: Outcome of the merge step
            output_files: Files produced by the run
        """
        report = self.build(merge_result, output_files)
        with atomic_write(output_path, suffix=".json.tmp") as tmp:
            json.dump(report, tmp, indent=2)
