"""Pytest fixtures for hq_variants tests."""

import gzip
from collections.abc import Callable
from pathlib import Path

import pytest

from hq_variants.logging_config import reset_logging

VCF_HEADER = (
    "##fileformat=VCFv4.2\n"
    "##contig=<ID=chr1,length=248956422>\n"
    '##INFO=<ID=DP,Number=1,Type=Integer,Description="Total depth">\n'
    '##INFO=<ID=AC,Number=A,Type=Integer,Description="Allele count">\n'
    '##INFO=<ID=AN,Number=1,Type=Integer,Description="Allele number">\n'
    "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\n"
)

# S1: three high-quality variants (Transition, Transversion, Other)
S1_RECORDS = [
    "chr1\t100\t.\tA\tG\t35\tPASS\tDP=20;AC=1;AN=2",   # pass
    "chr1\t200\t.\tC\tA\t50\tPASS\tDP=15;AC=2;AN=4",   # pass
    "chr1\t300\t.\tA\tT\t20\tPASS\tDP=30;AC=1;AN=2",   # QUAL < 30
    "chr1\t400\t.\tAT\tA\t40\tPASS\tDP=12;AC=1;AN=2",  # pass, indel
    "chr1\t500\t.\tG\tT\t45\tPASS\tDP=5;AC=1;AN=2",    # DP < 10
]

# S2: two high-quality variants, both Transitions
S2_RECORDS = [
    "chr1\t150\t.\tC\tT\t60\tPASS\tDP=25;AC=1;AN=2",   # pass
    "chr1\t250\t.\tG\tC\t33\tPASS\tDP=11;AC=1;AN=0",   # pass, AN = 0
    "chr1\t350\t.\tT\tC\t31\tPASS\tDP=40;AC=3;AN=4",   # pass
]


def vcf_text(records: list[str], header: str = VCF_HEADER) -> str:
    """Build VCF file content from body lines."""
    return header + "".join(f"{record}\n" for record in records)


@pytest.fixture
def write_vcf() -> Callable[..., Path]:
    """Return a helper that writes a gzipped VCF.

    Usage:
        path = write_vcf(tmp_path / "S1.vcf.gz", ["chr1\\t100\\t..."])
    """

    def _write(path: Path, records: list[str], header: str = VCF_HEADER) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        with gzip.open(path, "wt") as f:
            f.write(vcf_text(records, header))
        return path

    return _write


@pytest.fixture
def sample_dir(tmp_path: Path, write_vcf: Callable[..., Path]) -> Path:
    """Directory with S1.vcf.gz and S2.vcf.gz.

    After filtering and extraction:
    - S1: 3 rows (A>G Transition, C>A Transversion, AT>A Other)
    - S2: 2 rows (C>T and T>C Transitions); one record dropped for AN = 0
    """
    vcf_dir = tmp_path / "vcf"
    write_vcf(vcf_dir / "S1.vcf.gz", S1_RECORDS)
    write_vcf(vcf_dir / "S2.vcf.gz", S2_RECORDS)
    return vcf_dir


@pytest.fixture
def write_table() -> Callable[..., Path]:
    """Return a helper that writes a high-quality variant table."""

    def _write(path: Path, rows: list[str]) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        header = "CHROM\tPOS\tREF\tALT\tQUAL\tDP\tAF\tSAMPLE_ID\n"
        path.write_text(header + "".join(f"{row}\n" for row in rows))
        return path

    return _write


@pytest.fixture(autouse=True)
def clean_logging():
    """Drop handlers installed by setup_logging() between tests."""
    yield
    reset_logging()
