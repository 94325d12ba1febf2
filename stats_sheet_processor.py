#!/usr/bin/env python3
"""
Cabinet stats processor - handles '... Sq.Ft' sheets.
These sheets list area, cost per sq.ft and total per cabinet type above a
'Wood Work' / 'Total' footer.
"""

import re
from typing import Any, Dict, List, Optional

from base_sheet_processor import BaseSheetProcessor
from cell_utils import number_at, text_at
from models.quote_models import CabinetStats
from room_models import RoomAggregate
from type_classifier import normalize_type_name

_TABLE_END = re.compile(r"^(wood work|total)", re.IGNORECASE)
STATS_FIELDS = (("area", "area"), ("cost", "cost_per_sq_ft"), ("total", "total"))


class CabinetStatsSheetProcessor(BaseSheetProcessor):
    """Processor for cabinet area/cost (Sq.Ft) sheets"""

    @property
    def sheet_pattern(self) -> str:
        return r"sq\.?ft\.?$"

    @property
    def header_keyword(self) -> str:
        return "CABINET TYPE"

    @property
    def column_keywords(self) -> Dict[str, str]:
        return {
            'type': 'CABINET TYPE',
            'area': 'AREA',
            'cost': 'COST',
            'total': 'TOTAL'
        }

    def process_rows(self, rows: List[List[Any]], columns: Dict[str, Optional[int]], room: RoomAggregate) -> int:
        used = 0
        for row in rows:
            type_name = text_at(row, columns['type'])
            if not type_name:
                continue
            if _TABLE_END.match(type_name):
                break

            normalized = normalize_type_name(type_name)
            # Only columns present on this sheet override earlier figures for the type
            stats = CabinetStats(**{
                field_name: number_at(row, columns[role])
                for role, field_name in STATS_FIELDS
                if columns[role] is not None
            })
            room.merge_stats(normalized, stats)
            self.ensure_materials_placeholder(room, normalized, type_name)
            used += 1
        return used
