#!/usr/bin/env python3
"""
Maps free-text cabinet/module wording onto the canonical type categories used
to group a room's quote.

Headings (materials blocks, stats sheets) always get a type back: unknown
headings keep their own text. Line-item descriptions must land in a known
category, otherwise they are not classified at all.
"""

from typing import Optional, Tuple

BASE_CABINETS = "Base Cabinets"
WALL_CABINETS = "Wall Cabinets"
TALL_CABINETS = "Tall Cabinets"
SUSPENDED_CABINETS = "Suspended Cabinets"
OPEN_SHELF_PANELS = "Open Shelf & Panels"
SKIRTING = "Skirting"
LOFTS = "Lofts"
POOJA_UNITS = "Pooja Units"
FILLERS = "Fillers"
HINGED_WARDROBES = "Hinged Wardrobes"
SLIDING_WARDROBES = "Sliding Wardrobes"

# Checked top to bottom, first keyword hit wins
TYPE_RULES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("base",), BASE_CABINETS),
    (("wall",), WALL_CABINETS),
    (("mid tall", "tall"), TALL_CABINETS),
    (("suspended",), SUSPENDED_CABINETS),
    (("open shelf", "panel"), OPEN_SHELF_PANELS),
    (("skirt",), SKIRTING),
    (("loft",), LOFTS),
    (("pooja",), POOJA_UNITS),
    (("filler",), FILLERS),
    (("hinged wardrobe",), HINGED_WARDROBES),
    (("sliding wardrobe",), SLIDING_WARDROBES),
    (("wardrobe",), HINGED_WARDROBES),
)

# Extra wording accepted for line items only
DESCRIPTION_RULES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("shelf",), OPEN_SHELF_PANELS),
)


def _match_rules(text: str, rules) -> Optional[str]:
    lower = text.lower()
    for keywords, canonical in rules:
        if any(keyword in lower for keyword in keywords):
            return canonical
    return None


def normalize_type_name(heading: str) -> str:
    """Canonical type for a heading, or the trimmed heading itself"""
    name = heading.strip()
    return _match_rules(name, TYPE_RULES) or name


def classify_type(description: str) -> Optional[str]:
    """Canonical type for a line-item description, None when unrecognized"""
    return _match_rules(description, TYPE_RULES) or _match_rules(description, DESCRIPTION_RULES)
