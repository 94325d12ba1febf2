#!/usr/bin/env python3
"""
Summary sheet processor - handles the 'Summary' sheet of a quotation workbook.
The sheet carries two independent things: per-room materials text blocks and
a financial table of per-room totals with subtotal/discount/payable lines.

The sheet is read as a fold over its rows: the scan state remembers the room
whose materials are being read and, once found, the financial header layout.
"""

import logging
import re
from dataclasses import dataclass, field
from functools import reduce
from typing import Any, Dict, List, Optional

from cell_utils import cell_text, first_numeric, is_room_name, number_at, parse_number, text_at
from materials_parser import MaterialsRegistry, is_materials_text, parse_materials_block
from models.config_models import ParserConfig
from models.quote_models import QuoteSummary, SummaryFinancialRow
from workbook_loader import Workbook

_SUBTOTAL_LABEL = re.compile(r"^sub\s*total$", re.IGNORECASE)
_DISCOUNT_LABEL = re.compile(r"discount", re.IGNORECASE)
_TOTAL_WORD = re.compile(r"total", re.IGNORECASE)
_PAYABLE_WORD = re.compile(r"payable|after", re.IGNORECASE)

# Header keyword -> bucket, checked in order for every header cell
BUCKET_KEYWORDS = (
    (("UNIT",), 'modules'),
    (("ACCESS",), 'accessories'),
    (("APPLIANCE",), 'appliances'),
    (("SERVICE",), 'services'),
    (("FURNITURE", "DÉCOR", "DECOR"), 'furniture'),
)


@dataclass
class SummaryHeaderIndices:
    """Column positions of the financial table"""
    room: int
    total: int
    modules: Optional[int] = None
    accessories: Optional[int] = None
    appliances: Optional[int] = None
    services: Optional[int] = None
    furniture: Optional[int] = None


@dataclass
class SummaryScanState:
    """Accumulator threaded through the Summary rows"""
    current_room: Optional[str] = None
    header: Optional[SummaryHeaderIndices] = None
    materials_by_room: Dict[str, MaterialsRegistry] = field(default_factory=dict)
    rows: List[SummaryFinancialRow] = field(default_factory=list)
    subtotal: Optional[float] = None
    discount: Optional[float] = None
    total_payable: Optional[float] = None


@dataclass(frozen=True)
class SummaryScanResult:
    materials_by_room: Dict[str, MaterialsRegistry]
    financials: Optional[QuoteSummary]


class SummarySheetProcessor:
    """Processor for the Summary sheet"""

    def __init__(self, config: Optional[ParserConfig] = None):
        self.config = config or ParserConfig()
        self.logger = logging.getLogger(self.__class__.__name__)

    def process(self, workbook: Workbook) -> SummaryScanResult:
        """Materials per room plus the raw (not yet finalized) financial summary"""
        if not workbook.has_sheet(self.config.summary_sheet_name):
            self.logger.info(f"No '{self.config.summary_sheet_name}' sheet - no materials or financials")
            return SummaryScanResult(materials_by_room={}, financials=None)

        rows = workbook.rows(self.config.summary_sheet_name)
        state = reduce(self.fold_row, rows, SummaryScanState())

        if state.header is None:
            self.logger.info("Summary sheet has no ROOM/TOTAL header - financial table skipped")

        financials = QuoteSummary(
            rows=state.rows,
            subtotal=state.subtotal,
            total_payable=state.total_payable,
            discount=state.discount
        )
        self.logger.info(
            f"Summary: materials for {len(state.materials_by_room)} rooms, "
            f"{len(state.rows)} financial rows"
        )
        return SummaryScanResult(materials_by_room=state.materials_by_room, financials=financials)

    def fold_row(self, state: SummaryScanState, row: List[Any]) -> SummaryScanState:
        values = [cell_text(value) for value in row]
        state = self.track_room(state, values)
        state = self.collect_materials(state, values)

        if state.header is None:
            state.header = self.detect_header(values)
            return state
        return self.collect_financials(state, row)

    def track_room(self, state: SummaryScanState, values: List[str]) -> SummaryScanState:
        """A room marker sets the room context until the next marker"""
        room = next((value.strip() for value in values if is_room_name(value)), None)
        if room:
            state.current_room = room
            state.materials_by_room.setdefault(room, MaterialsRegistry())
        return state

    def collect_materials(self, state: SummaryScanState, values: List[str]) -> SummaryScanState:
        if not state.current_room:
            return state
        block_text = next((value for value in values if is_materials_text(value)), None)
        if block_text:
            registry = state.materials_by_room[state.current_room]
            registry.add_all(parse_materials_block(block_text))
        return state

    def detect_header(self, values: List[str]) -> Optional[SummaryHeaderIndices]:
        """Financial header: first row with a ROOM cell and a TOTAL cell"""
        upper = [value.upper() for value in values]
        room_index = next((i for i, text in enumerate(upper) if "ROOM" in text), None)
        total_index = next((i for i, text in enumerate(upper) if "TOTAL" in text), None)
        if room_index is None or total_index is None:
            return None

        header = SummaryHeaderIndices(room=room_index, total=total_index)
        for index, text in enumerate(upper):
            bucket = next((name for keywords, name in BUCKET_KEYWORDS
                           if any(keyword in text for keyword in keywords)), None)
            if bucket:
                setattr(header, bucket, index)
            elif "HARDWARE" in text and header.accessories is None:
                header.accessories = index

        self.logger.debug(f"Financial header found: {header}")
        return header

    def resolve_label(self, row: List[Any], header: SummaryHeaderIndices) -> str:
        label = text_at(row, header.room)
        if label:
            return label
        for index, value in enumerate(row):
            if index == header.total:
                continue
            text = cell_text(value).strip()
            if text:
                return text
        return ""

    def collect_financials(self, state: SummaryScanState, row: List[Any]) -> SummaryScanState:
        header = state.header
        label = self.resolve_label(row, header)

        total = number_at(row, header.total)
        buckets = {
            'modules': number_at(row, header.modules),
            'accessories': number_at(row, header.accessories),
            'appliances': number_at(row, header.appliances),
            'services': number_at(row, header.services),
            'furniture': number_at(row, header.furniture),
        }
        candidates = [parse_number(value) for value in row]

        has_numeric = any(value is not None for value in [total, *buckets.values(), *candidates])
        if not label or not has_numeric:
            return state

        narrow = [total, *buckets.values()]
        broad = narrow + candidates
        normalized = label.strip().lower()

        if normalized == "total":
            if state.subtotal is None:
                state.subtotal = first_numeric(*broad)
        elif _SUBTOTAL_LABEL.match(label):
            value = first_numeric(*narrow)
            if value is not None:
                state.subtotal = value
        elif _DISCOUNT_LABEL.search(label):
            value = first_numeric(*broad)
            if value is not None:
                state.discount = value
        elif _TOTAL_WORD.search(label) and _PAYABLE_WORD.search(label):
            value = first_numeric(*narrow)
            if value is not None:
                state.total_payable = value
        else:
            state.rows.append(self.build_room_row(label, total, buckets))
        return state

    @staticmethod
    def build_room_row(label: str, total: Optional[float], buckets: Dict[str, Optional[float]]) -> SummaryFinancialRow:
        amounts = {name: value if value is not None else 0 for name, value in buckets.items()}
        if total is None:
            derived = sum(amounts.values())
            total = derived if derived > 0 else None
        return SummaryFinancialRow(room=label, total=total, **amounts)
