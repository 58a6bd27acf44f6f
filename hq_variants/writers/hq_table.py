"""High-quality variant table writer.

Output file (one per sample, overwritten on every run):
- <sample_id>_hq.tsv - header line, then one AnnotatedRow per line

CHROM  POS  REF  ALT  QUAL  DP  AF  SAMPLE_ID
"""

from contextlib import AbstractContextManager
from pathlib import Path
from types import TracebackType
from typing import IO

from hq_variants.io_utils import atomic_write
from hq_variants.models import HQ_HEADER, AnnotatedRow


class HqTableWriter:
    """Writes AnnotatedRows to a per-sample table.

    The table is written to a temporary file and only renamed into place
    when the writer closes without an error, so a reader never observes a
    partially written table.

    Usage:
        with HqTableWriter(Path("out/S1_hq.tsv")) as writer:
            for row in rows:
                writer.write_row(row)
    """

    def __init__(self, output_path: Path) -> None:
        """Initialize writer and open the temporary output.

        Args:
            output_path: Final table path
        """
        self.output_path = output_path
        self.row_count = 0

        self._context: AbstractContextManager[IO[str]] = atomic_write(output_path)
        self._handle = self._context.__enter__()
        self._handle.write(HQ_HEADER + "\n")

    def write_row(self, row: AnnotatedRow) -> None:
        """Append one row to the table."""
        self._handle.write(row.to_line() + "\n")
        self.row_count += 1

    def __enter__(self) -> "HqTableWriter":
        """Context manager entry."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Context manager exit - publish the table, or discard it on error."""
        self._context.__exit__(exc_type, exc_val, exc_tb)
