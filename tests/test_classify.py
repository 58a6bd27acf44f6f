"""Tests for substitution classification."""

import itertools

import pytest

from hq_variants.classify import classify_substitution, substitution_label
from hq_variants.models import SubstitutionClass

BASES = "ACGT"


class TestClassifySubstitution:
    """Test Transition / Transversion / Other rules."""

    @pytest.mark.parametrize(
        "ref,alt",
        [("A", "G"), ("G", "A"), ("C", "T"), ("T", "C")],
    )
    def test_transitions(self, ref: str, alt: str) -> None:
        """Purine-purine and pyrimidine-pyrimidine changes."""
        assert classify_substitution(ref, alt) is SubstitutionClass.TRANSITION

    @pytest.mark.parametrize(
        "ref,alt",
        [("A", "C"), ("A", "T"), ("G", "C"), ("G", "T"), ("C", "A"), ("T", "G")],
    )
    def test_transversions(self, ref: str, alt: str) -> None:
        """Purine-pyrimidine changes."""
        assert classify_substitution(ref, alt) is SubstitutionClass.TRANSVERSION

    @pytest.mark.parametrize(
        "ref,alt",
        [
            ("AT", "A"),  # deletion
            ("A", "AT"),  # insertion
            ("AC", "GT"),  # multi-base
            ("N", "A"),
            ("A", "*"),
            ("A", "."),
            ("a", "g"),  # lowercase is not normalized
            ("A", "G,T"),  # multi-allelic ALT column
            ("", ""),
        ],
    )
    def test_other(self, ref: str, alt: str) -> None:
        """Anything that is not a single-base substitution."""
        assert classify_substitution(ref, alt) is SubstitutionClass.OTHER

    def test_total_over_single_bases(self) -> None:
        """Every pair of distinct bases is a Transition or Transversion."""
        for ref, alt in itertools.permutations(BASES, 2):
            assert classify_substitution(ref, alt) is not SubstitutionClass.OTHER

    def test_symmetric(self) -> None:
        """Swapping REF and ALT never changes the class."""
        for ref, alt in itertools.product(BASES + "N", repeat=2):
            assert classify_substitution(ref, alt) == classify_substitution(alt, ref)

    def test_identical_bases(self) -> None:
        """REF equal to ALT is not a transition."""
        assert classify_substitution("A", "A") is SubstitutionClass.TRANSVERSION

    def test_values(self) -> None:
        """Category values are the table labels."""
        assert [c.value for c in SubstitutionClass] == ["Transition", "Transversion", "Other"]


class TestSubstitutionLabel:
    """Test REF>ALT labels."""

    def test_label(self) -> None:
        """Label joins alleles with ">"."""
        assert substitution_label("A", "G") == "A>G"
        assert substitution_label("AT", "A") == "AT>A"
