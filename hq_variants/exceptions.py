"""
Custom exceptions for the high-quality variant pipeline.
Kept minimal: data problems inside a sample are counted, not raised.
"""


class HqVariantsError(Exception):
    """Base exception for pipeline errors."""
    pass


class ConfigurationError(HqVariantsError):
    """Raised when the run configuration is invalid (paths, thresholds, workers)."""
    pass


class NoSamplesError(HqVariantsError):
    """Raised when the input directory holds no per-sample VCF files."""
    pass
