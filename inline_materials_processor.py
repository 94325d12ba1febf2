#!/usr/bin/env python3
"""
Inline materials processor - fallback for room sheets that are neither stats
nor detail sheets. Picks up 'Carcass:' text written directly on the sheet
when the Summary sheet gave the room no materials.
"""

import logging
from typing import Any, List

from cell_utils import cell_text
from materials_parser import parse_materials_block
from room_models import RoomAggregate


class InlineMaterialsProcessor:
    """Processor for any other room sheet"""

    marker = "Carcass:"

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    def matches_sheet(self, sheet_name: str) -> bool:
        return True

    def process(self, sheet_name: str, rows: List[List[Any]], room: RoomAggregate) -> int:
        if len(room.materials):
            return 0

        added = 0
        for row in rows:
            for cell in row:
                text = cell_text(cell)
                if self.marker in text:
                    added += room.materials.add_all(parse_materials_block(text))

        if added:
            self.logger.debug(f"Sheet '{sheet_name}': {added} inline materials entries for '{room.name}'")
        return added
