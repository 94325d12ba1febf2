#!/usr/bin/env python3
"""
Room aggregator - walks every room sheet of the workbook, works out which room
it belongs to and hands it to the processor for its kind of sheet.
"""

import logging
from typing import Dict, List, Optional

from cell_utils import detect_room_name
from detail_sheet_processor import DetailSheetProcessor
from inline_materials_processor import InlineMaterialsProcessor
from materials_parser import MaterialsRegistry
from models.config_models import ParserConfig
from room_models import RoomAggregate
from stats_sheet_processor import CabinetStatsSheetProcessor
from workbook_loader import Workbook


class RoomAggregator:
    """Builds one RoomAggregate per distinct room across the workbook"""

    def __init__(self, config: Optional[ParserConfig] = None):
        self.config = config or ParserConfig()
        self.logger = logging.getLogger(self.__class__.__name__)

        # Order matters: the inline fallback accepts every sheet
        self.sheet_processors = [
            CabinetStatsSheetProcessor(),
            DetailSheetProcessor(),
            InlineMaterialsProcessor()
        ]

    def _find_processor_for_sheet(self, sheet_name: str):
        """Find the appropriate processor for a given sheet name"""
        for processor in self.sheet_processors:
            if processor.matches_sheet(sheet_name):
                return processor
        return None

    def aggregate(self, workbook: Workbook, materials_by_room: Dict[str, MaterialsRegistry]) -> List[RoomAggregate]:
        rooms: Dict[str, RoomAggregate] = {}

        for sheet_name in workbook.sheet_names:
            if sheet_name in self.config.skipped_sheet_names:
                continue

            rows = workbook.rows(sheet_name)
            if not rows:
                self.logger.debug(f"Sheet '{sheet_name}' is empty - skipping")
                continue

            room_name = detect_room_name(rows, sheet_name)
            room = rooms.get(room_name)
            if room is None:
                room = self._new_room(room_name, materials_by_room.get(room_name))
                rooms[room_name] = room

            processor = self._find_processor_for_sheet(sheet_name)
            self.logger.info(f"Processing sheet '{sheet_name}' for room '{room_name}' "
                             f"with {processor.__class__.__name__}")
            processor.process(sheet_name, rows, room)

        return list(rooms.values())

    def _new_room(self, room_name: str, summary_materials: Optional[MaterialsRegistry]) -> RoomAggregate:
        room = RoomAggregate(name=room_name)
        if summary_materials is not None:
            for type_name, block in summary_materials.items():
                room.materials.add(type_name, block)
        return room
