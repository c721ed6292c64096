"""Spreadsheet extraction: openpyxl for .xlsx, pandas with xlrd for legacy .xls."""

from pathlib import Path
from typing import Any, List

import pandas as pd
from openpyxl import load_workbook

from namecast.extraction.base import ContentKind, ExtractionStrategy


def cell_to_text(value: Any) -> str:
    """Render a cell value the way it reads in the sheet (``3.0`` -> ``3``)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class SpreadsheetStrategy(ExtractionStrategy):
    """First worksheet, every non-empty cell, row-major.

    Header labels are not filtered here: a sheet's cells are taken as-is.
    """

    kind = ContentKind.SPREADSHEET

    def parse(self, path: Path) -> List[str]:
        workbook = load_workbook(filename=str(path), read_only=True, data_only=True)
        try:
            sheet = workbook.worksheets[0]
            names = []
            for row in sheet.iter_rows(values_only=True):
                for value in row:
                    if value is None:
                        continue
                    text = cell_to_text(value).strip()
                    if text:
                        names.append(text)
            return names
        finally:
            workbook.close()

    def get_description(self) -> str:
        return "Excel workbook (.xlsx/.xlsm), first sheet flattened row by row"


class LegacySpreadsheetStrategy(ExtractionStrategy):
    """Excel 97-2003 workbooks (.xls) read through pandas and xlrd.

    Same flattening as ``SpreadsheetStrategy``: first sheet, row-major,
    every non-empty cell.
    """

    kind = ContentKind.LEGACY_SPREADSHEET

    def parse(self, path: Path) -> List[str]:
        frame = pd.read_excel(path, sheet_name=0, header=None, dtype=object, engine="xlrd")
        names = []
        for row in frame.itertuples(index=False, name=None):
            for value in row:
                if pd.isna(value):
                    continue
                text = cell_to_text(value).strip()
                if text:
                    names.append(text)
        return names

    def get_description(self) -> str:
        return "Legacy Excel workbook (.xls), first sheet flattened row by row"
