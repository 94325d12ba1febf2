import json

import pytest

from errors import MalformedWorkbookError, NoRecognizableDataError
from models.config_models import ParserConfig
from quote_converter import QuoteConverter

KITCHEN = "Flat 402 - Kitchen"


@pytest.fixture
def payload(quote_workbook_bytes):
    return QuoteConverter().convert_to_dict(quote_workbook_bytes)


class TestConvertWorkbook:
    def test_single_room_with_sorted_types(self, payload):
        assert [room["name"] for room in payload["rooms"]] == [KITCHEN]
        types = [entry["type"] for entry in payload["rooms"][0]["types"]]
        assert types == ["Base Cabinets", "Custom Bay Unit", "Sliding Wardrobes", "Wall Cabinets"]

    def test_type_entries(self, payload):
        entries = {entry["type"]: entry for entry in payload["rooms"][0]["types"]}

        base = entries["Base Cabinets"]
        assert base["label"] == "Base Cabinets"
        assert base["materials"] == {"Carcass": "18mm BWP Ply", "Handles": "SS Profile"}
        assert base["stats"] == {"areaSqFt": 12, "costPerSqFt": 450, "total": 5400}
        assert base["dimensionAggregate"] == 1050
        assert [item["code"] for item in base["items"]] == ["BC-600", "BC-450"]
        assert base["items"][0]["price"] == 12500
        assert base["items"][1]["price"] is None

        custom = entries["Custom Bay Unit"]
        assert custom["label"] == "Custom Bay Unit"
        assert custom["stats"] == {"areaSqFt": 4, "costPerSqFt": 0, "total": 0}

        wall = entries["Wall Cabinets"]
        assert wall["materials"] == {"Carcass": "16mm MR Ply", "Shutter": "Acrylic"}
        assert wall["stats"] == {"areaSqFt": 8, "costPerSqFt": None, "total": None}
        assert wall["items"] == []

        sliding = entries["Sliding Wardrobes"]
        assert sliding["materials"] == {}
        assert sliding["dimensionAggregate"] == 1200
        assert sliding["stats"] == {"areaSqFt": None, "costPerSqFt": None, "total": None}

    def test_summary_and_project_total(self, payload):
        summary = payload["summary"]
        assert summary["subtotal"] == 7300
        assert summary["discount"] == 300
        assert summary["totalPayable"] == 7000
        assert summary["rows"] == [{
            "room": KITCHEN, "modules": 5000, "accessories": 1200, "appliances": 0,
            "services": 800, "furniture": 300, "total": 7300
        }]
        assert payload["meta"]["totalProjectCost"] == 7000

    def test_metadata(self, payload):
        meta = payload["meta"]
        assert meta["reference"] == "Skyline Towers"
        assert meta["propertyName"] == "Skyline Towers"
        assert meta["customer"] == "Asha Rao"
        assert meta["designerName"] == "Vikram Shah"
        assert meta["designerEmail"] == "vikram@studio.in"
        assert meta["designerPhone"] == "9876543210"
        assert meta["quoteNumber"] == "QUOTE-1042"
        assert meta["quoteDate"] == "12/08/2025"
        assert meta["address"] is None

    def test_conversion_is_deterministic(self, quote_workbook_bytes):
        converter = QuoteConverter()
        first = converter.convert_to_dict(quote_workbook_bytes)
        second = QuoteConverter().convert_to_dict(quote_workbook_bytes)

        assert first == second
        assert json.dumps(first, sort_keys=False) == json.dumps(second, sort_keys=False)

    def test_workbook_without_summary(self, workbook_bytes):
        data = workbook_bytes({
            "Kitchen - Sq.Ft": [["CABINET TYPE", "AREA", "COST", "TOTAL"], ["Base Unit", 10, 100, 1000]],
        })

        payload = QuoteConverter().convert_to_dict(data)

        assert payload["summary"] is None
        assert payload["meta"]["totalProjectCost"] == 1000

    def test_configured_summary_sheet(self, workbook_bytes):
        data = workbook_bytes({
            "Overview": [["ROOM", "TOTAL"], ["Kitchen", 900]],
            "Kitchen - Sq.Ft": [["CABINET TYPE", "AREA", "COST", "TOTAL"], ["Base Unit", 10, 100, 1000]],
        })
        config = ParserConfig(summary_sheet_name="Overview", skipped_sheet_names=["Overview"])

        payload = QuoteConverter(config).convert_to_dict(data)

        assert payload["summary"]["rows"][0]["total"] == 900
        assert [room["name"] for room in payload["rooms"]] == ["Kitchen - Sq.Ft"]


class TestConversionErrors:
    def test_only_skipped_sheets(self, workbook_bytes):
        data = workbook_bytes({
            "Summary": [["ROOM", "TOTAL"], ["Kitchen", 100]],
            "Terms & Conditions": [["Valid for 30 days"]],
        })

        with pytest.raises(NoRecognizableDataError):
            QuoteConverter().convert(data)

    def test_not_a_workbook(self):
        with pytest.raises(MalformedWorkbookError):
            QuoteConverter().convert(b"PK\x03\x04 broken zip")
