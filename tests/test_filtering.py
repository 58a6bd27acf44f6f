"""Tests for the quality filter."""

import pytest

from hq_variants.config import QualityThresholds
from hq_variants.filtering import (
    AC,
    DP,
    QUAL,
    filter_failures,
    passes_quality_filter,
    record_filter_outcome,
)
from hq_variants.models import SampleStatistics, VariantRecord
from hq_variants.parsers.vcf import parse_record


def make_record(qual: str = "35", info: str = "DP=20;AC=1;AN=2") -> VariantRecord:
    """Build a record with the given QUAL and INFO columns."""
    record = parse_record(f"chr1\t100\t.\tA\tG\t{qual}\tPASS\t{info}", "S1")
    assert record is not None
    return record


class TestPassesQualityFilter:
    """Test the default QUAL >= 30, DP >= 10, AC >= 0.05 filter."""

    def test_passing_record(self) -> None:
        """All three criteria met."""
        assert passes_quality_filter(make_record()) is True

    def test_boundaries_are_inclusive(self) -> None:
        """Values equal to the thresholds pass."""
        record = make_record(qual="30", info="DP=10;AC=0.05;AN=2")

        assert passes_quality_filter(record) is True

    @pytest.mark.parametrize(
        "qual,info,failed",
        [
            ("29.9", "DP=20;AC=1;AN=2", [QUAL]),
            ("35", "DP=9;AC=1;AN=2", [DP]),
            ("35", "DP=20;AC=0.04;AN=2", [AC]),
            ("35", "DP=20;AC=0;AN=2", [AC]),
            ("10", "DP=5;AC=0;AN=2", [QUAL, DP, AC]),
        ],
    )
    def test_below_threshold(self, qual: str, info: str, failed: list[str]) -> None:
        """Each criterion is reported when its value is below threshold."""
        record = make_record(qual=qual, info=info)

        assert filter_failures(record) == failed
        assert passes_quality_filter(record) is False

    def test_allele_count_compared_directly(self) -> None:
        """AC is compared to the threshold as-is, not divided by AN."""
        # AF would be 1/1000 = 0.001, but AC = 1 >= 0.05
        record = make_record(info="DP=20;AC=1;AN=1000")

        assert passes_quality_filter(record) is True

    @pytest.mark.parametrize(
        "qual,info,failed",
        [
            (".", "DP=20;AC=1;AN=2", [QUAL]),
            ("35", "AC=1;AN=2", [DP]),
            ("35", "DP=20;AN=2", [AC]),
            ("35", "DP=20;AC=1,2;AN=4", [AC]),
            ("35", ".", [DP, AC]),
        ],
    )
    def test_missing_values_fail(self, qual: str, info: str, failed: list[str]) -> None:
        """A missing or non-numeric value fails its criterion."""
        record = make_record(qual=qual, info=info)

        assert filter_failures(record) == failed

    def test_custom_thresholds(self) -> None:
        """Thresholds are configurable."""
        strict = QualityThresholds(min_quality=50, min_depth=30, min_allele_count=2)
        record = make_record(qual="40", info="DP=20;AC=1;AN=2")

        assert filter_failures(record, strict) == [QUAL, DP, AC]


class TestRecordFilterOutcome:
    """Test per-criterion counters."""

    def test_counts(self) -> None:
        """Passed and failed records are counted per criterion."""
        stats = SampleStatistics(sample_id="S1")
        thresholds = QualityThresholds()
        records = [
            make_record(),
            make_record(qual="10"),
            make_record(qual="10", info="DP=5;AC=1;AN=2"),
            make_record(info="DP=20;AC=0;AN=2"),
        ]

        outcomes = [record_filter_outcome(r, thresholds, stats) for r in records]

        assert outcomes == [True, False, False, False]
        assert stats.passed_filter == 1
        assert stats.failed_filter == 3
        assert stats.failed_quality == 2
        assert stats.failed_depth == 1
        assert stats.failed_allele_count == 1


class TestQualityThresholds:
    """Test the recorded exclusion expression."""

    def test_default_expression(self) -> None:
        """Defaults render as the bcftools exclusion expression."""
        assert QualityThresholds().expression() == "QUAL<30 || DP<10 || AC<0.05"
