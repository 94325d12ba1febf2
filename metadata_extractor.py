#!/usr/bin/env python3
"""
Metadata extractor - pulls the quote header fields (customer, designer,
property, quote number, dates) out of any sheet.

A labelled field takes the nearest non-empty cell to the right of its label.
Quote numbers, e-mail addresses, phone numbers and dates are also picked up
wherever they appear. The first value found for a field is kept.
"""

import logging
import re
from typing import Dict, List, Optional, Tuple

from cell_utils import cell_text
from models.quote_models import QuoteMetadata
from workbook_loader import Workbook

# Field -> label patterns, tried in order
LABEL_PATTERNS: Tuple[Tuple[str, Tuple[re.Pattern, ...]], ...] = (
    ('reference', (re.compile(r"^reference$", re.IGNORECASE),)),
    ('property_name', (re.compile(r"property\s*name", re.IGNORECASE),)),
    ('customer', (re.compile(r"^customer$", re.IGNORECASE),)),
    ('price_version', (re.compile(r"price\s*version", re.IGNORECASE),)),
    ('quote_valid_till', (re.compile(r"quote\s*valid\s*till", re.IGNORECASE),)),
    ('quote_status', (re.compile(r"quote\s*status", re.IGNORECASE),)),
    ('property_config', (re.compile(r"property\s*config", re.IGNORECASE),)),
    ('total_built_up_area', (re.compile(r"total\s*built", re.IGNORECASE),)),
    ('designer_name', (re.compile(r"design\s*expert", re.IGNORECASE), re.compile(r"dp\s*name", re.IGNORECASE))),
    ('address', (re.compile(r"address", re.IGNORECASE),)),
)

QUOTE_NUMBER_PATTERN = re.compile(r"\bquote[-\s]?\w+", re.IGNORECASE)
DATE_PATTERN = re.compile(r"(\d{2}[/-]\d{2}[/-]\d{2,4})|(\d{4}[/-]\d{2}[/-]\d{2})")
PHONE_MIN_DIGITS = 7


def find_labelled_value(values: List[str], pattern: re.Pattern) -> Optional[str]:
    """Nearest non-empty cell after the first cell matching pattern"""
    for index, value in enumerate(values):
        if pattern.search(value.strip()):
            for candidate in values[index + 1:]:
                if candidate.strip():
                    return candidate.strip()
            return None
    return None


def _looks_like_email(value: str) -> bool:
    return "@" in value and "." in value


def _looks_like_phone(value: str) -> bool:
    return len(re.sub(r"\D", "", value)) >= PHONE_MIN_DIGITS


class MetadataExtractor:
    """Scans every sheet row by row for header fields"""

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    def extract(self, workbook: Workbook) -> QuoteMetadata:
        found: Dict[str, str] = {}
        for sheet_name in workbook.sheet_names:
            for row in workbook.rows(sheet_name):
                self.scan_row([cell_text(value) for value in row], found)

        self.logger.debug(f"Metadata fields found: {sorted(found)}")
        return QuoteMetadata(**found)

    def scan_row(self, values: List[str], found: Dict[str, str]) -> None:
        for field_name, patterns in LABEL_PATTERNS:
            value = next(filter(None, (find_labelled_value(values, pattern) for pattern in patterns)), None)
            if value:
                self._keep_first(found, field_name, value)
                if field_name == 'reference':
                    self._keep_first(found, 'property_name', found['reference'])

        quote_number = next((value for value in values if QUOTE_NUMBER_PATTERN.search(value)), None)
        if quote_number:
            self._keep_first(found, 'quote_number', quote_number.strip())

        email = next((value for value in values if _looks_like_email(value)), None)
        if email:
            self._keep_first(found, 'designer_email', email.strip())

        phone = next((value for value in values if _looks_like_phone(value)), None)
        if phone:
            self._keep_first(found, 'designer_phone', phone.strip())

        for value in values:
            match = DATE_PATTERN.search(value)
            if match:
                self._keep_first(found, 'quote_date', match.group(0))
                break

    @staticmethod
    def _keep_first(found: Dict[str, str], field_name: str, value: str) -> None:
        if field_name not in found:
            found[field_name] = value
