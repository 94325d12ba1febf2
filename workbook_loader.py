#!/usr/bin/env python3
"""
Workbook loader - turns uploaded spreadsheet bytes into plain rows of cells.
Text cells stay text (units and currency symbols included); numeric
interpretation is left to the processors that need it.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from io import BytesIO
from typing import Any, Dict, List, Union

import pandas as pd

from errors import MalformedWorkbookError

Cell = Union[str, int, float, None]
Row = List[Cell]


@dataclass(frozen=True)
class Workbook:
    """Ordered sheets of rows, read-only for the rest of the pipeline"""
    sheets: Dict[str, List[Row]] = field(default_factory=dict)

    @property
    def sheet_names(self) -> List[str]:
        return list(self.sheets.keys())

    def rows(self, sheet_name: str) -> List[Row]:
        return self.sheets.get(sheet_name, [])

    def has_sheet(self, sheet_name: str) -> bool:
        return sheet_name in self.sheets


class WorkbookLoader:
    """Reads .xlsx/.xlsm (openpyxl) and legacy .xls (xlrd) through pandas"""

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    def load(self, data: bytes) -> Workbook:
        if not data:
            raise MalformedWorkbookError("Uploaded file is empty")

        try:
            frames = pd.read_excel(BytesIO(data), sheet_name=None, header=None, dtype=object)
        except Exception as e:
            self.logger.error(f"Could not read workbook: {e}")
            raise MalformedWorkbookError(f"Could not read workbook: {e}") from e

        if not frames:
            raise MalformedWorkbookError("No sheets found in uploaded workbook")

        sheets = {
            str(sheet_name): self._frame_to_rows(df)
            for sheet_name, df in frames.items()
        }
        self.logger.debug(f"Loaded {len(sheets)} sheets: {list(sheets)}")
        return Workbook(sheets=sheets)

    def _frame_to_rows(self, df: pd.DataFrame) -> List[Row]:
        rows = []
        for values in df.itertuples(index=False, name=None):
            row = [self._clean_cell(value) for value in values]
            # Blank rows carry no information for any processor
            if all(cell is None or (isinstance(cell, str) and not cell.strip()) for cell in row):
                continue
            rows.append(row)
        return rows

    @staticmethod
    def _clean_cell(value: Any) -> Cell:
        if value is None:
            return None
        if isinstance(value, (datetime, date)):
            if pd.isna(value):
                return None
            return value.strftime("%Y-%m-%d")
        if isinstance(value, str):
            return value
        if isinstance(value, bool):
            return str(value).upper()
        if isinstance(value, (int, float)):
            return None if pd.isna(value) else value
        # numpy scalars and anything pandas hands back
        if pd.isna(value):
            return None
        if hasattr(value, "item"):
            return value.item()
        return str(value)
