"""Tests for allele frequency derivation."""

import pytest

from hq_variants.metrics import allele_frequency, derive_row
from hq_variants.models import HQ_HEADER, VariantRecord
from hq_variants.parsers.vcf import parse_record


def make_record(info: str, qual: str = "35") -> VariantRecord:
    """Build a filtered record with the given INFO column."""
    record = parse_record(f"chr1\t100\t.\tA\tG\t{qual}\tPASS\t{info}", "S1")
    assert record is not None
    return record


class TestAlleleFrequency:
    """Test AC / AN computation."""

    def test_ratio(self) -> None:
        """AF is AC divided by AN."""
        assert allele_frequency(1.0, 2.0) == 0.5

    def test_zero_allele_number(self) -> None:
        """AN = 0 has no frequency."""
        assert allele_frequency(1.0, 0.0) is None

    def test_missing_inputs(self) -> None:
        """Missing AC or AN has no frequency."""
        assert allele_frequency(None, 2.0) is None
        assert allele_frequency(1.0, None) is None

    def test_not_clamped(self) -> None:
        """AC > AN gives a frequency above 1."""
        assert allele_frequency(3.0, 2.0) == 1.5


class TestDeriveRow:
    """Test table row construction from filtered records."""

    def test_complete_annotation(self) -> None:
        """A record with DP, AC and AN becomes a row."""
        row = derive_row(make_record("DP=20;AC=0.1;AN=2"))

        assert row is not None
        assert row.depth == 20
        assert row.allele_frequency == pytest.approx(0.05)
        assert row.sample_id == "S1"

    def test_row_line(self) -> None:
        """Rows are tab-separated in header column order."""
        row = derive_row(make_record("DP=20;AC=1;AN=2"))

        assert row is not None
        assert HQ_HEADER == "CHROM\tPOS\tREF\tALT\tQUAL\tDP\tAF\tSAMPLE_ID"
        assert row.to_line() == "chr1\t100\tA\tG\t35\t20\t0.5\tS1"

    def test_fractional_quality_kept(self) -> None:
        """Non-integral QUAL is written with its decimals."""
        row = derive_row(make_record("DP=20;AC=1;AN=4", qual="35.5"))

        assert row is not None
        assert row.to_fields()[4] == "35.5"
        assert row.to_fields()[6] == "0.25"

    @pytest.mark.parametrize(
        "info",
        [
            "AC=1;AN=2",          # no DP
            "DP=20;AN=2",         # no AC
            "DP=20;AC=1",         # no AN
            "DP=20;AC=1;AN=0",    # AN = 0
            "DP=20.5;AC=1;AN=2",  # non-integral DP
            "DP=20;AC=1;AN=x",    # non-numeric AN
        ],
    )
    def test_incomplete_annotation(self, info: str) -> None:
        """Records missing any required field produce no row."""
        assert derive_row(make_record(info)) is None

    def test_flag_without_value(self) -> None:
        """A key present as a flag has no usable value."""
        assert derive_row(make_record("DP;AC=1;AN=2")) is None

    def test_frequency_above_one(self) -> None:
        """AC > AN is passed through unchanged."""
        row = derive_row(make_record("DP=20;AC=3;AN=2"))

        assert row is not None
        assert row.allele_frequency == 1.5
