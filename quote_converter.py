#!/usr/bin/env python3
"""
Quote converter - orchestrates the workbook-to-structured-quote pipeline.
One call handles one upload; nothing is shared between calls.
"""

import logging
from typing import Optional

from errors import NoRecognizableDataError
from financial_finalizer import finalize_financials
from metadata_extractor import MetadataExtractor
from models.config_models import ParserConfig
from models.quote_models import ConvertResponse
from response_assembler import assemble_response
from room_aggregator import RoomAggregator
from summary_sheet_processor import SummarySheetProcessor
from workbook_loader import WorkbookLoader


class QuoteConverter:
    """Runs loader, summary reconciliation, room aggregation, metadata and assembly"""

    def __init__(self, config: Optional[ParserConfig] = None):
        self.config = config or ParserConfig()
        self.logger = logging.getLogger(self.__class__.__name__)

        self.loader = WorkbookLoader()
        self.summary_processor = SummarySheetProcessor(self.config)
        self.room_aggregator = RoomAggregator(self.config)
        self.metadata_extractor = MetadataExtractor()

    def convert(self, data: bytes) -> ConvertResponse:
        workbook = self.loader.load(data)

        summary_result = self.summary_processor.process(workbook)
        financials = finalize_financials(summary_result.financials, self.config.discount_noise_threshold)

        rooms = self.room_aggregator.aggregate(workbook, summary_result.materials_by_room)
        if not rooms:
            raise NoRecognizableDataError("No recognizable cabinet data found in workbook")

        meta = self.metadata_extractor.extract(workbook)
        response = assemble_response(rooms, meta, financials)

        self.logger.info(f"Converted workbook: {len(response.rooms)} rooms, "
                         f"{sum(len(room.types) for room in response.rooms)} types")
        return response

    def convert_to_dict(self, data: bytes) -> dict:
        return self.convert(data).to_payload()
