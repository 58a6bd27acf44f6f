"""Output writers for filtered VCFs, high-quality tables and JSON reports."""

from hq_variants.writers.filtered_vcf import write_filtered_vcf
from hq_variants.writers.hq_table import HqTableWriter
from hq_variants.writers.report import ReportWriter

__all__ = ["HqTableWriter", "ReportWriter", "write_filtered_vcf"]
