from materials_parser import MaterialsRegistry, is_materials_text, parse_materials_block
from models.quote_models import MaterialsBlock


class TestParseMaterialsBlock:
    def test_sections_keyed_by_canonical_type(self):
        blocks = parse_materials_block(
            "Base Cabinets:\nCarcass: 18mm BWP Ply\nHandles: SS Profile\n\n"
            "Wall Units:\nShutter: Acrylic"
        )

        assert list(blocks) == ["Base Cabinets", "Wall Cabinets"]
        assert blocks["Base Cabinets"].label == "Base Cabinets"
        assert blocks["Base Cabinets"].fields == {"Carcass": "18mm BWP Ply", "Handles": "SS Profile"}
        assert blocks["Wall Cabinets"].label == "Wall Units"
        assert blocks["Wall Cabinets"].fields == {"Shutter": "Acrylic"}

    def test_lines_without_key_or_value_are_ignored(self):
        blocks = parse_materials_block("Lofts:\nCarcass: 18mm\nFinish:\njust a note\n: orphan")
        assert blocks["Lofts"].fields == {"Carcass": "18mm"}

    def test_value_keeps_later_colons(self):
        blocks = parse_materials_block("Base:\nHinges: Hettich: soft close")
        assert blocks["Base Cabinets"].fields == {"Hinges": "Hettich: soft close"}

    def test_marker_detection(self):
        assert is_materials_text("Base:\nCarcass: Ply")
        assert is_materials_text("Handles: SS")
        assert not is_materials_text("Carcass ply")


class TestMaterialsRegistry:
    def test_first_writer_wins(self):
        registry = MaterialsRegistry()
        assert registry.add("Base Cabinets", MaterialsBlock(label="Base", fields={"Carcass": "Ply"}))
        assert not registry.add("Base Cabinets", MaterialsBlock(label="Base Cabinets"))

        assert registry.get("Base Cabinets").fields == {"Carcass": "Ply"}
        assert len(registry) == 1

    def test_add_all_counts_new_entries(self):
        registry = MaterialsRegistry()
        registry.add("Lofts", MaterialsBlock(label="Lofts"))
        added = registry.add_all({
            "Lofts": MaterialsBlock(label="Lofts", fields={"Carcass": "MR"}),
            "Fillers": MaterialsBlock(label="Fillers"),
        })

        assert added == 1
        assert "Fillers" in registry
        assert registry.get("Lofts").fields == {}
