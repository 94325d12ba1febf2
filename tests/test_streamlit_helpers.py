import pytest

from backend.app import App
from config_manager import ConfigManager
from streamlit_frontend import (
    QuoteConverterAPI,
    format_money,
    iter_chunks,
    summary_totals,
    to_pdf_filename,
)


class TestFormatting:
    @pytest.mark.parametrize("value,expected", [
        (100000, "₹1,00,000"),
        (12345678, "₹1,23,45,678"),
        (1234.5, "₹1,234.5"),
        (999, "₹999"),
        (0, "₹0"),
        (-8000, "-₹8,000"),
        (None, "-"),
    ])
    def test_format_money(self, value, expected):
        assert format_money(value) == expected

    @pytest.mark.parametrize("original,expected", [
        ("Flat 402 Quote.xlsx", "Flat_402_Quote.pdf"),
        ("quote-v2_final.xls", "quote-v2_final.pdf"),
        (".xlsx", "design_summary.pdf"),
    ])
    def test_pdf_filename(self, original, expected):
        assert to_pdf_filename(original) == expected


class TestUploadHelpers:
    def test_iter_chunks(self):
        assert list(iter_chunks(b"abcdefg", 3)) == [(0, b"abc"), (1, b"def"), (2, b"g")]

    def test_client_chunk_sizes_from_megabytes(self):
        api = QuoteConverterAPI("http://backend", max_direct_mb=1, chunk_size_mb=0.5)

        assert api.max_direct_bytes == 1024 * 1024
        assert api.chunk_size == 512 * 1024

    def test_client_limits_follow_server_config(self, tmp_path):
        server = App(ConfigManager(str(tmp_path / "converter_config.json"))).app.test_client()
        server.post('/api/config/update', json={
            'section': 'upload',
            'values': {'max_direct_upload_mb': 1, 'chunk_size_mb': 0.5}
        })

        api = QuoteConverterAPI.from_config(server.get('/api/config/inquiry').get_json(), base_url="http://backend")

        assert api.base_url == "http://backend"
        assert api.max_direct_bytes == 1024 * 1024
        assert api.chunk_size == 512 * 1024

    def test_client_defaults_when_config_unavailable(self):
        api = QuoteConverterAPI.from_config({'success': False, 'error': 'timeout'})

        assert api.max_direct_bytes == 4 * 1024 * 1024
        assert api.chunk_size == 3 * 1024 * 1024


class TestSummaryTotals:
    def test_rows_without_total_count_buckets(self):
        totals = summary_totals([
            {'room': 'Kitchen', 'modules': 5000, 'accessories': 1200, 'appliances': 0,
             'services': 800, 'furniture': 300, 'total': 7300},
            {'room': 'Balcony', 'modules': 100, 'accessories': 0, 'appliances': 0,
             'services': 0, 'furniture': 0, 'total': None},
        ])

        assert totals['modules'] == 5100
        assert totals['total'] == 7400
