#!/usr/bin/env python3
"""
Response assembler - shapes room aggregates, metadata and the finalized
financial summary into the structured quote returned to callers.
"""

import logging
from typing import List, Optional

from models.quote_models import (
    ConvertResponse,
    QuoteMetadata,
    QuoteSummary,
    RoomResponse,
    TypeEntry,
    TypeStats
)
from room_models import RoomAggregate

logger = logging.getLogger(__name__)


def format_type(room: RoomAggregate, type_name: str) -> TypeEntry:
    materials = room.materials.get(type_name)
    stats = room.stats.get(type_name)
    return TypeEntry(
        type=type_name,
        label=materials.label if materials else type_name,
        materials=dict(materials.fields) if materials else {},
        stats=TypeStats(
            area_sq_ft=stats.area if stats else None,
            cost_per_sq_ft=stats.cost_per_sq_ft if stats else None,
            total=stats.total if stats else None
        ),
        dimension_aggregate=room.width_for(type_name),
        items=list(room.items.get(type_name, []))
    )


def format_rooms(rooms: List[RoomAggregate]) -> List[RoomResponse]:
    """Rooms in first-seen order, types sorted by name"""
    return [
        RoomResponse(name=room.name, types=[format_type(room, type_name) for type_name in room.type_keys()])
        for room in rooms
    ]


def calculate_stats_total(rooms: List[RoomResponse]) -> float:
    return sum(entry.stats.total or 0 for room in rooms for entry in room.types)


def assemble_response(rooms: List[RoomAggregate], meta: QuoteMetadata,
                      summary: Optional[QuoteSummary]) -> ConvertResponse:
    payload = format_rooms(rooms)

    if summary is not None and summary.total_payable is not None:
        project_total = summary.total_payable
    else:
        project_total = calculate_stats_total(payload)

    if project_total > 0 and meta.total_project_cost is None:
        meta = meta.model_copy(update={'total_project_cost': round(project_total, 2)})

    logger.debug(f"Assembled {len(payload)} rooms, project total {meta.total_project_cost}")
    return ConvertResponse(rooms=payload, meta=meta, summary=summary)
