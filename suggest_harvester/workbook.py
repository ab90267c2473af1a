from __future__ import annotations

import calendar
import logging
from datetime import date
from pathlib import Path
from typing import Iterator, List

from openpyxl import Workbook, load_workbook
from openpyxl.worksheet.worksheet import Worksheet

from .config import WorkbookConfig
from .models import KeywordRow, ResultPair

LOGGER = logging.getLogger(__name__)

DAY_NAMES = [name.upper() for name in calendar.day_name]


def day_name(for_date: date) -> str:
    """Return the upper-case English weekday name used as a sheet name."""

    return DAY_NAMES[for_date.weekday()]


def normalize_day(value: str) -> str:
    normalized = value.strip().upper()
    if normalized not in DAY_NAMES:
        msg = f"Unknown day '{value}'. Expected one of: {', '.join(DAY_NAMES)}"
        raise ValueError(msg)
    return normalized


class KeywordSheet:
    """One weekday sheet: keyword rows in, suggestion pairs out."""

    def __init__(self, worksheet: Worksheet, conf: WorkbookConfig) -> None:
        self._ws = worksheet
        self._conf = conf

    @property
    def name(self) -> str:
        return self._ws.title

    # Reading -----------------------------------------------------------------
    def rows(self) -> Iterator[KeywordRow]:
        """Yield data rows in sheet order, header rows excluded."""

        start = self._conf.header_row + 1
        for row_index, values in enumerate(
            self._ws.iter_rows(min_row=start + 1, values_only=True), start=start
        ):
            yield KeywordRow(
                row_index=row_index,
                keyword=_cell_text(values, self._conf.keyword_column),
                longest=_cell_text(values, self._conf.longest_column),
                shortest=_cell_text(values, self._conf.shortest_column),
            )

    # Writing -----------------------------------------------------------------
    def write_result(self, row: KeywordRow, pair: ResultPair) -> None:
        """Store the pair in the row's output cells and on the row object."""

        excel_row = row.row_index + 1
        self._ws.cell(row=excel_row, column=self._conf.longest_column + 1, value=pair.longest)
        self._ws.cell(row=excel_row, column=self._conf.shortest_column + 1, value=pair.shortest)
        row.longest = pair.longest
        row.shortest = pair.shortest


class KeywordWorkbook:
    """Thin wrapper around an openpyxl workbook for this project."""

    def __init__(self, conf: WorkbookConfig, path: Path | None = None) -> None:
        self._conf = conf
        self._path = path if path is not None else conf.resolved_path
        self._book: Workbook | None = None

    @property
    def path(self) -> Path:
        return self._path

    def _workbook(self) -> Workbook:
        if self._book is None:
            LOGGER.debug("Opening workbook %s", self._path)
            self._book = load_workbook(str(self._path))
        return self._book

    @property
    def sheet_names(self) -> List[str]:
        return list(self._workbook().sheetnames)

    def get_sheet(self, name: str) -> KeywordSheet | None:
        book = self._workbook()
        if name not in book.sheetnames:
            return None
        return KeywordSheet(book[name], self._conf)

    def save(self) -> bool:
        """Overwrite the source file with the in-memory workbook and close it."""

        try:
            self._workbook().save(str(self._path))
        except OSError as exc:
            LOGGER.error("Error writing to the Excel file: %s", exc)
            return False
        finally:
            self.close()
        LOGGER.info("Saved workbook %s", self._path)
        return True

    def close(self) -> None:
        if self._book is not None:
            self._book.close()
            self._book = None


def select_sheet(workbook: KeywordWorkbook, day: str) -> KeywordSheet | None:
    """Return the sheet named after ``day`` or None when the workbook has none."""

    sheet = workbook.get_sheet(day)
    if sheet is None:
        LOGGER.info("No data for today: %s", day)
    return sheet


def _cell_text(values: tuple, column: int) -> str | None:
    if column >= len(values):
        return None
    value = values[column]
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)
