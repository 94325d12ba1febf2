#!/usr/bin/env python3
"""
Detail processor - handles '... Details' sheets of individually priced line items.
Items are filed under the cabinet type their description names; items that
name no known type are dropped.
"""

import re
from typing import Any, Dict, List, Optional

from base_sheet_processor import BaseSheetProcessor
from cell_utils import extract_width, number_at, text_at
from models.quote_models import DetailItem
from room_models import RoomAggregate
from type_classifier import classify_type

_SUBTOTAL_ROW = re.compile(r"^total$", re.IGNORECASE)


class DetailSheetProcessor(BaseSheetProcessor):
    """Processor for line-item (Details) sheets"""

    @property
    def sheet_pattern(self) -> str:
        return r"details$"

    @property
    def header_keyword(self) -> str:
        return "DESCRIPTION"

    @property
    def column_keywords(self) -> Dict[str, str]:
        return {
            'serial': 'SL',
            'code': 'CODE',
            'description': 'DESCRIPTION',
            'size': 'SIZE',
            'price': 'PRICE'
        }

    def process_rows(self, rows: List[List[Any]], columns: Dict[str, Optional[int]], room: RoomAggregate) -> int:
        used = 0
        for row in rows:
            serial = text_at(row, columns['serial'])
            description = text_at(row, columns['description'])
            if not serial or not description:
                continue
            if _SUBTOTAL_ROW.match(description):
                continue

            type_name = classify_type(description)
            if not type_name:
                self.logger.debug(f"Unclassified line item dropped: '{description[:50]}'")
                continue

            size = text_at(row, columns['size'])
            room.add_item(type_name, DetailItem(
                code=text_at(row, columns['code']),
                description=description,
                size=size,
                price=number_at(row, columns['price'])
            ))
            if size:
                room.add_width(type_name, extract_width(size))

            self.ensure_materials_placeholder(room, type_name, type_name)
            used += 1
        return used
