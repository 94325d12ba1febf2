#!/usr/bin/env python3
"""
Exceptions raised by the quote conversion pipeline and the JSON error payload
returned to HTTP callers.
"""

from datetime import datetime, timezone
from typing import Optional, Union


class QuoteConversionError(Exception):
    """Base class for errors that abort a whole conversion"""


class MalformedWorkbookError(QuoteConversionError):
    """Uploaded bytes are not a readable workbook, or it has no sheets"""


class NoRecognizableDataError(QuoteConversionError):
    """Workbook was readable but no room could be aggregated from it"""


def make_error_payload(stage: str, err: Union[Exception, str], extra: Optional[dict] = None) -> dict:
    base = {
        "success": False,
        "error": str(err),
        "stage": stage,
        "timestamp": datetime.now(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z"),
    }
    if extra:
        base.update(extra)
    return base
