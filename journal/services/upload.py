"""Feed file parsing for imports (.csv and .xlsx)."""

import csv
import logging
from collections.abc import Iterator
from io import BytesIO
from pathlib import Path

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Font

from journal.core.config import Settings, get_settings
from journal.core.exceptions import ValidationError
from journal.schemas.upload import SubjectFeed

logger = logging.getLogger(__name__)

# Excel template columns for roster upload
ROSTER_TEMPLATE_COLUMNS = [
    ("full_name", "Full Name", True),
    ("group_name", "Group", True),
]


def _cell_text(value) -> str:
    return str(value).strip() if value is not None else ""


class FeedReader:
    """Reads roster, subject and name-list feeds from disk."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    def _check_extension(self, path: Path) -> str:
        suffix = path.suffix.lower()
        allowed = [ext.lower() for ext in self.settings.ALLOWED_IMPORT_EXTENSIONS]
        if suffix not in allowed:
            raise ValidationError(
                f"Unsupported file type: {suffix or '(none)'}",
                details={"file": path.name, "allowed": allowed},
            )
        return suffix

    def _iter_rows(self, path: str | Path) -> Iterator[list[str]]:
        """Rows of the file as lists of stripped cell texts."""
        path = Path(path)
        suffix = self._check_extension(path)
        logger.debug(f"[FEED] Reading {path.name}")

        if suffix == ".xlsx":
            try:
                wb = load_workbook(path, read_only=True, data_only=True)
            except Exception as e:
                raise ValidationError(f"Invalid Excel file: {str(e)}", details={"file": path.name})
            try:
                ws = wb.active
                for row in ws.iter_rows(values_only=True):
                    yield [_cell_text(v) for v in row]
            finally:
                wb.close()
            return

        try:
            with open(path, newline="", encoding=self.settings.IMPORT_ENCODING) as f:
                for row in csv.reader(f):
                    yield [cell.strip() for cell in row]
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise ValidationError(f"Cannot read file: {str(e)}", details={"file": path.name})

    def _non_blank_names(self, path: str | Path) -> list[str]:
        """Non-blank names, one per line (.csv) or per first cell (.xlsx).

        A .csv name line is taken whole, so names may contain commas.
        """
        path = Path(path)
        if self._check_extension(path) == ".xlsx":
            return [row[0] for row in self._iter_rows(path) if row and row[0]]

        try:
            with open(path, encoding=self.settings.IMPORT_ENCODING) as f:
                return [line.strip() for line in f if line.strip()]
        except (OSError, UnicodeDecodeError) as e:
            raise ValidationError(f"Cannot read file: {str(e)}", details={"file": path.name})

    def read_roster_file(self, path: str | Path) -> list[tuple[str, str]]:
        """``(full_name, group_name)`` pairs; the header row is skipped.

        Rows with fewer than two columns are dropped with a warning.
        """
        pairs = []
        header_seen = False
        for row_num, row in enumerate(self._iter_rows(path), start=1):
            if not any(row):
                continue
            if not header_seen:
                header_seen = True
                continue
            if len(row) < 2:
                logger.warning(f"[FEED] Row {row_num} skipped: expected 2 columns, got {len(row)}")
                continue
            pairs.append((row[0], row[1]))
        logger.info(f"[FEED] Read {len(pairs)} roster rows from {Path(path).name}")
        return pairs

    def read_subject_file(self, path: str | Path) -> SubjectFeed:
        """First non-blank line is the subject, the rest are lesson names."""
        names = self._non_blank_names(path)
        if not names:
            raise ValidationError("Subject name is missing", details={"file": Path(path).name})
        return SubjectFeed(subject_name=names[0], lesson_names=names[1:])

    def read_name_list(self, path: str | Path) -> list[str]:
        """One name per non-blank line."""
        return self._non_blank_names(path)


def generate_roster_template() -> bytes:
    """Excel template for roster upload."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Roster"

    # Write headers
    headers = [col[1] for col in ROSTER_TEMPLATE_COLUMNS]
    for col_idx, header in enumerate(headers, start=1):
        cell = ws.cell(row=1, column=col_idx, value=header)
        cell.font = Font(bold=True)

    # Add sample row
    sample_data = ["Ivanov Ivan", "G1"]
    for col_idx, value in enumerate(sample_data, start=1):
        ws.cell(row=2, column=col_idx, value=value)

    ws.column_dimensions["A"].width = 30
    ws.column_dimensions["B"].width = 15

    output = BytesIO()
    wb.save(output)
    output.seek(0)
    return output.getvalue()
