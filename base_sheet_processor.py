#!/usr/bin/env python3
"""
Base sheet processor class that defines the interface for all room sheet processors.
A processor recognizes its sheets by name, locates its header row and folds
the rows below it into a room aggregate.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from cell_utils import cell_text, find_column, find_header_row
from models.quote_models import MaterialsBlock
from room_models import RoomAggregate


class BaseSheetProcessor(ABC):
    """Abstract base class for sheet processors"""

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    @abstractmethod
    def sheet_pattern(self) -> str:
        """Regex matched (case-insensitive) against the sheet name"""
        pass

    @property
    @abstractmethod
    def header_keyword(self) -> str:
        """Upper-case text that identifies the header row"""
        pass

    @property
    @abstractmethod
    def column_keywords(self) -> Dict[str, str]:
        """Column role -> upper-case keyword searched in header cells"""
        pass

    def matches_sheet(self, sheet_name: str) -> bool:
        """Check if this processor handles the given sheet name"""
        return re.search(self.sheet_pattern, sheet_name, re.IGNORECASE) is not None

    def locate_columns(self, rows: List[List[Any]]) -> Optional[Dict[str, Any]]:
        """Header row index plus column index per role, None when there is no header"""
        header_index = find_header_row(rows, self.header_keyword)
        if header_index is None:
            return None

        header = [cell_text(value) for value in rows[header_index]]
        columns = {role: find_column(header, keyword) for role, keyword in self.column_keywords.items()}
        self.logger.debug(f"Header at row {header_index}, columns: {columns}")
        return {'header_index': header_index, 'columns': columns}

    def process(self, sheet_name: str, rows: List[List[Any]], room: RoomAggregate) -> int:
        """Fold a sheet into the room; returns the number of rows used"""
        layout = self.locate_columns(rows)
        if layout is None:
            self.logger.debug(f"No '{self.header_keyword}' header in sheet '{sheet_name}' - skipping")
            return 0

        data_rows = rows[layout['header_index'] + 1:]
        used = self.process_rows(data_rows, layout['columns'], room)
        self.logger.debug(f"Sheet '{sheet_name}': {used} rows added to room '{room.name}'")
        return used

    def ensure_materials_placeholder(self, room: RoomAggregate, type_name: str, label: str) -> None:
        """Every type seen on a sheet gets at least an empty materials entry"""
        if type_name not in room.materials:
            room.materials.add(type_name, MaterialsBlock(label=label))

    @abstractmethod
    def process_rows(self, rows: List[List[Any]], columns: Dict[str, Optional[int]], room: RoomAggregate) -> int:
        """Process the rows below the header row"""
        pass
