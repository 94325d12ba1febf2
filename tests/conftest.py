from io import BytesIO
from typing import Dict, List

import openpyxl
import pytest

from workbook_loader import Workbook


def build_workbook_bytes(sheets: Dict[str, List[list]]) -> bytes:
    """Write sheets (name -> rows) into an in-memory .xlsx"""
    wb = openpyxl.Workbook()
    wb.remove(wb.active)
    for name, rows in sheets.items():
        ws = wb.create_sheet(title=name)
        for row in rows:
            ws.append(row)
    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


KITCHEN = "Flat 402 - Kitchen"

KITCHEN_MATERIALS = (
    "Base Cabinets:\n"
    "Carcass: 18mm BWP Ply\n"
    "Handles: SS Profile\n"
    "\n"
    "Wall Cabinets:\n"
    "Carcass: 16mm MR Ply\n"
    "Shutter: Acrylic"
)

QUOTE_SHEETS = {
    "Summary": [
        ["Reference", None, "Skyline Towers"],
        ["Customer", "Asha Rao"],
        ["Design Expert", "Vikram Shah", "vikram@studio.in", "9876543210"],
        ["QUOTE-1042", "Date", "12/08/2025"],
        [KITCHEN],
        [KITCHEN_MATERIALS],
        ["ROOM", "UNITS", "ACCESSORIES", "APPLIANCES", "SERVICES", "FURNITURE", "TOTAL"],
        [KITCHEN, 5000, 1200, 0, 800, 300, 7300],
        ["Sub Total", None, None, None, None, None, 7300],
        ["Discount", None, None, None, None, None, 300],
        ["Total Payable", None, None, None, None, None, 7000],
    ],
    "Kitchen - Sq.Ft": [
        [KITCHEN],
        ["CABINET TYPE", "AREA (SQ.FT)", "COST / SQ.FT", "TOTAL"],
        ["Base Unit", "12", "450", "5400"],
        ["Custom Bay Unit", 4, 0, 0],
        ["Wall Cabinets", 8, None, None],
        ["Wood Work Total", None, None, 5400],
        ["Loft", 3, 100, 300],
    ],
    "Kitchen - Details": [
        [KITCHEN],
        ["SL NO", "CODE", "DESCRIPTION", "SIZE", "PRICE"],
        [1, "BC-600", "Base Cabinet - 2 Drawer", "600Wx720H", "₹12,500"],
        [2, "SW-1", "Sliding Wardrobe - 2 Door", "1200Wx2100H", 45000],
        [3, "MISC", "Labour charges", None, 2000],
        [None, None, "Total", None, 59500],
        [4, "BC-450", "Base corner unit", "450 x 720", None],
    ],
    "Terms & Conditions": [
        ["Prices valid for 30 days"],
    ],
}


@pytest.fixture
def workbook_bytes():
    return build_workbook_bytes


@pytest.fixture
def quote_workbook_bytes():
    return build_workbook_bytes(QUOTE_SHEETS)


@pytest.fixture
def make_workbook():
    def _make(sheets: Dict[str, List[list]]) -> Workbook:
        return Workbook(sheets={name: [list(row) for row in rows] for name, rows in sheets.items()})
    return _make
