#!/usr/bin/env python3
"""
Working structures built while aggregating one workbook.
They exist only for the duration of a conversion and are turned into frozen
response models by the response assembler.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from materials_parser import MaterialsRegistry
from models.quote_models import CabinetStats, DetailItem


@dataclass
class RoomAggregate:
    """Everything collected for one room across all of its sheets"""
    name: str
    materials: MaterialsRegistry = field(default_factory=MaterialsRegistry)
    stats: Dict[str, CabinetStats] = field(default_factory=dict)
    items: Dict[str, List[DetailItem]] = field(default_factory=dict)
    width_totals: Dict[str, float] = field(default_factory=dict)

    def type_keys(self) -> List[str]:
        """Union of types seen in materials, stats and items, sorted"""
        keys = set(self.materials.keys()) | set(self.stats) | set(self.items)
        return sorted(keys)

    def merge_stats(self, type_name: str, stats: CabinetStats) -> None:
        current = self.stats.get(type_name)
        self.stats[type_name] = current.merged(stats) if current else stats

    def add_item(self, type_name: str, item: DetailItem) -> None:
        self.items.setdefault(type_name, []).append(item)

    def add_width(self, type_name: str, width: float) -> None:
        self.width_totals[type_name] = self.width_totals.get(type_name, 0.0) + width

    def width_for(self, type_name: str) -> Optional[float]:
        return self.width_totals.get(type_name) or None
