#!/usr/bin/env python3
"""
Financial finalizer - reconciles the Summary sheet's raw figures into a
consistent subtotal / discount / total payable view.
"""

import logging
from typing import Optional

from models.quote_models import QuoteSummary, SummaryFinancialRow

logger = logging.getLogger(__name__)

DISCOUNT_NOISE_THRESHOLD = 0.001


def finalize_financials(summary: Optional[QuoteSummary],
                        noise_threshold: float = DISCOUNT_NOISE_THRESHOLD) -> Optional[QuoteSummary]:
    """
    Return a finalized copy of summary.

    - A subtotal without any room rows gets a single 'Total' row so there is
      always a totals basis to render.
    - A missing discount is derived as subtotal - total payable when both are
      known and the difference is above noise_threshold.

    The total payable is never derived: the quote only shows a payable amount
    the workbook stated.
    """
    if summary is None:
        return None

    updates = {}

    if summary.subtotal is not None and not summary.rows:
        updates['rows'] = [SummaryFinancialRow(
            room="Total",
            modules=summary.subtotal,
            total=summary.subtotal
        )]

    if summary.discount is None and summary.subtotal is not None and summary.total_payable is not None:
        derived = summary.subtotal - summary.total_payable
        if abs(derived) > noise_threshold:
            updates['discount'] = derived
            logger.debug(f"Derived discount {derived:.2f} from subtotal and total payable")

    return summary.model_copy(update=updates) if updates else summary
