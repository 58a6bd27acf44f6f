"""Parsers for per-sample VCF files and high-quality variant tables."""

from hq_variants.parsers.table import iter_table_rows, read_table_header
from hq_variants.parsers.vcf import (
    iter_header,
    iter_records,
    parse_info,
    parse_record,
    sample_id_from_path,
)

__all__ = [
    # VCF
    "parse_info",
    "parse_record",
    "iter_records",
    "iter_header",
    "sample_id_from_path",
    # Tables
    "read_table_header",
    "iter_table_rows",
]
