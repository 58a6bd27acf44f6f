"""High-quality variant extraction and substitution summary tool.

Filters per-sample VCF files, extracts allele frequencies for high-quality
variants, merges the per-sample tables and summarizes transitions and
transversions per sample.
"""

__version__ = "1.0.0"
__author__ = "Data Tecnica International"
