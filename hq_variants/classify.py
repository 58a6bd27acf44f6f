"""Substitution classification.

Rules are applied in order and the first match wins:

1. A<->G                                   -> Transition
2. C<->T                                   -> Transition
3. both alleles single bases from A,C,G,T  -> Transversion
4. anything else (indels, multi-base, N, missing, lowercase) -> Other
"""

from hq_variants.models import SubstitutionClass

NUCLEOTIDES = frozenset("ACGT")

# Purine and pyrimidine pairs, in either direction
TRANSITION_PAIRS: frozenset[frozenset[str]] = frozenset(
    {frozenset({"A", "G"}), frozenset({"C", "T"})}
)


def classify_substitution(ref: str, alt: str) -> SubstitutionClass:
    """Classify a (reference, alternate) allele pair.

    Args:
        ref: Reference allele
        alt: Alternate allele

    Returns:
        SubstitutionClass for the pair

    Example:
        >>> classify_substitution("G", "A").value
        'Transition'
        >>> classify_substitution("A", "T").value
        'Transversion'
        >>> classify_substitution("AT", "A").value
        'Other'
    """
    if frozenset({ref, alt}) in TRANSITION_PAIRS:
        return SubstitutionClass.TRANSITION
    if ref in NUCLEOTIDES and alt in NUCLEOTIDES:
        return SubstitutionClass.TRANSVERSION
    return SubstitutionClass.OTHER


def substitution_label(ref: str, alt: str) -> str:
    """Label a substitution as "REF>ALT" (e.g. "A>G")."""
    return f"{ref}>{alt}"
