#!/usr/bin/env python3
"""
Cell-level helpers shared by every sheet processor.
Cells arrive from the loader as text, numbers or None; these helpers read the
same cell either as display text or as a number.
"""

import math
import re
from typing import Any, List, Optional, Sequence

# Characters kept before numeric parsing
_NON_NUMERIC = re.compile(r"[^0-9.+\-]")
_LEADING_FLOAT = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")
_WIDTH_NUMBER = re.compile(r"([0-9]+(?:\.[0-9]+)?)\s*[wW]")
_ANY_NUMBER = re.compile(r"([0-9]+(?:\.[0-9]+)?)")
_ROOM_SEPARATOR = re.compile(r" - ")


def cell_text(value: Any) -> str:
    """Render a cell as the text a reader would see"""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value)


def parse_number(value: Any) -> Optional[float]:
    """
    Read a cell as a number.

    Strings lose every character except digits, '.', '+' and '-' and the
    leading float of what remains is parsed. Anything unreadable is None,
    never 0.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return None if math.isnan(number) else number

    sanitized = _NON_NUMERIC.sub("", str(value))
    if not sanitized:
        return None
    match = _LEADING_FLOAT.match(sanitized)
    if not match:
        return None
    return float(match.group(0))


def first_numeric(*values: Optional[float]) -> Optional[float]:
    for value in values:
        if value is not None:
            return value
    return None


def cell_at(row: Sequence[Any], index: Optional[int]) -> Any:
    """Cell at index, or None when the column is unmapped or past the row end"""
    if index is None or index < 0 or index >= len(row):
        return None
    return row[index]


def text_at(row: Sequence[Any], index: Optional[int]) -> str:
    return cell_text(cell_at(row, index)).strip()


def number_at(row: Sequence[Any], index: Optional[int]) -> Optional[float]:
    return parse_number(cell_at(row, index))


def find_column(header: List[str], keyword: str) -> Optional[int]:
    """Index of the first header cell whose upper-cased text contains keyword"""
    for index, text in enumerate(header):
        if keyword in text.upper():
            return index
    return None


def find_header_row(rows: List[List[Any]], keyword: str) -> Optional[int]:
    for index, row in enumerate(rows):
        if any(keyword in cell_text(cell).upper() for cell in row):
            return index
    return None


def is_room_name(text: str) -> bool:
    """Room markers look like 'Flat 402 - Kitchen'"""
    if not text:
        return False
    trimmed = text.strip()
    return bool(trimmed) and bool(_ROOM_SEPARATOR.search(trimmed))


def detect_room_name(rows: List[List[Any]], fallback: str) -> str:
    for row in rows:
        for cell in row:
            text = cell_text(cell)
            if is_room_name(text):
                return text.strip()
    return fallback


def extract_width(size: str) -> float:
    """Width out of a size string such as '600Wx2100H'; 0 when there is none"""
    match = _WIDTH_NUMBER.search(size)
    if match:
        return float(match.group(1))
    match = _ANY_NUMBER.search(size)
    if match:
        return float(match.group(1))
    return 0.0
