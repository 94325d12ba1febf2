#!/usr/bin/env python3
"""
Parsing of free-text materials blocks and the insert-only registry that keeps
the first materials entry seen for every cabinet type.
"""

import logging
import re
from typing import Dict, Iterator, Optional, Tuple

from models.quote_models import MaterialsBlock
from type_classifier import normalize_type_name

logger = logging.getLogger(__name__)

MATERIALS_MARKERS = ("Carcass:", "Handles:")
_SECTION_BREAK = re.compile(r"\n\s*\n")


def is_materials_text(text: str, markers: Tuple[str, ...] = MATERIALS_MARKERS) -> bool:
    return any(marker in text for marker in markers)


def parse_materials_block(text: str) -> Dict[str, MaterialsBlock]:
    """
    Parse a blob such as::

        Base Cabinets:
        Carcass: 18mm BWP Ply
        Handles: SS

        Wall Cabinets:
        Shutter: Acrylic

    into {canonical type: MaterialsBlock}. The first line of every blank-line
    separated section is the type heading, the rest are 'Attribute: value'
    pairs. Lines without a key or a value are ignored.
    """
    blocks: Dict[str, MaterialsBlock] = {}

    for section in _SECTION_BREAK.split(text.replace("\r\n", "\n")):
        lines = [line.strip() for line in section.strip().split("\n")]
        lines = [line for line in lines if line]
        if not lines:
            continue

        title = re.sub(r":$", "", lines[0]).strip()
        if not title:
            continue

        fields: Dict[str, str] = {}
        for line in lines[1:]:
            key, separator, value = line.partition(":")
            key, value = key.strip(), value.strip()
            if separator and key and value:
                fields[key] = value

        blocks[normalize_type_name(title)] = MaterialsBlock(label=title, fields=fields)

    return blocks


class MaterialsRegistry:
    """Insert-only mapping of canonical type -> MaterialsBlock"""

    def __init__(self):
        self._blocks: Dict[str, MaterialsBlock] = {}

    def add(self, type_name: str, block: MaterialsBlock) -> bool:
        """Store block unless the type already has one; True when stored"""
        if type_name in self._blocks:
            logger.debug(f"Materials for '{type_name}' already known, keeping first entry")
            return False
        self._blocks[type_name] = block
        return True

    def add_all(self, blocks: Dict[str, MaterialsBlock]) -> int:
        return sum(1 for type_name, block in blocks.items() if self.add(type_name, block))

    def get(self, type_name: str) -> Optional[MaterialsBlock]:
        return self._blocks.get(type_name)

    def items(self) -> Iterator[Tuple[str, MaterialsBlock]]:
        return iter(list(self._blocks.items()))

    def keys(self):
        return self._blocks.keys()

    def __contains__(self, type_name: str) -> bool:
        return type_name in self._blocks

    def __len__(self) -> int:
        return len(self._blocks)

    def __repr__(self) -> str:
        return f"MaterialsRegistry({list(self._blocks)})"
