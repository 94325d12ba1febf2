#!/usr/bin/env python3
"""
Streamlit Frontend for the Interior Quote Converter
Preview of the structured quote produced by the conversion backend.

Usage:
1. First, start your backend server:
   python -m backend.main

2. Then, in a separate terminal, start this frontend:
   streamlit run streamlit_frontend.py
"""

import os
import re
from typing import Any, Dict, Iterator, List, Optional, Tuple
import uuid

import pandas as pd
import requests
import streamlit as st

# Configuration
BACKEND_URL = os.getenv('QUOTE_BACKEND_URL', "http://localhost:5000")
MB = 1024 * 1024
NOT_APPLICABLE = "-"

TEXT = {
    'title': '🛋️ Interior Quote Converter',
    'subtitle': 'Upload a priced workbook to preview the customer quotation',
    'backend_error': '🔴 **Backend Server Not Running**',
    'backend_instruction': '''
    Please start the backend server first:

    ```bash
    python -m backend.main
    ```

    Then refresh this page.
    ''',
    'file_upload': 'Choose an Excel file (.xlsx, .xlsm, .xls)',
    'convert': '🔄 Convert',
    'converting': 'Converting workbook...',
    'convert_failed': '❌ Conversion failed: {}',
    'convert_success': 'Preview ready. Review the summary below.',
    'quote_details': '📋 Quote Details',
    'financial_summary': '💰 Financial Summary',
    'before_discount': 'Total before discount',
    'discount': 'Discount',
    'total_payable': 'Total payable',
    'pdf_name': 'PDF file name: **{}**',
}

# Header fields shown as editable inputs, in display order
META_FIELDS = [
    ('customer', 'Customer'),
    ('propertyName', 'Property Name'),
    ('address', 'Address'),
    ('propertyConfig', 'Property Config'),
    ('totalBuiltUpArea', 'Total Built-up Area'),
    ('quoteNumber', 'Quote Number'),
    ('quoteDate', 'Quote Date'),
    ('quoteValidTill', 'Quote Valid Till'),
    ('quoteStatus', 'Quote Status'),
    ('priceVersion', 'Price Version'),
    ('designerName', 'Design Expert'),
    ('designerEmail', 'Designer Email'),
    ('designerPhone', 'Designer Phone'),
]

SUMMARY_BUCKETS = ['modules', 'accessories', 'appliances', 'services', 'furniture']


def get_text(key: str) -> str:
    return TEXT.get(key, key)


def _group_indian(digits: str) -> str:
    """12345678 -> 1,23,45,678"""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_money(value: Optional[float], symbol: str = "₹") -> str:
    """Rupee amount with Indian digit grouping and at most two decimals"""
    if value is None:
        return NOT_APPLICABLE
    sign = "-" if value < 0 else ""
    whole, _, fraction = f"{abs(value):.2f}".partition(".")
    fraction = fraction.rstrip("0")
    return f"{sign}{symbol}{_group_indian(whole)}" + (f".{fraction}" if fraction else "")


def format_number(value: Optional[float]) -> str:
    return format_money(value, symbol="")


def to_pdf_filename(original: str) -> str:
    base = re.sub(r"\.[^/.]+$", "", original)
    base = re.sub(r"[^a-z0-9\-_]+", "_", base, flags=re.IGNORECASE)
    return f"{base or 'design_summary'}.pdf"


def iter_chunks(data: bytes, chunk_size: int) -> Iterator[Tuple[int, bytes]]:
    for index, start in enumerate(range(0, len(data), chunk_size)):
        yield index, data[start:start + chunk_size]


def summary_totals(rows: List[Dict[str, Any]]) -> Dict[str, float]:
    """Column totals of the room rows; a row without total counts its buckets"""
    totals = {bucket: 0.0 for bucket in SUMMARY_BUCKETS + ['total']}
    for row in rows:
        bucket_sum = 0.0
        for bucket in SUMMARY_BUCKETS:
            amount = row.get(bucket) or 0
            totals[bucket] += amount
            bucket_sum += amount
        totals['total'] += row['total'] if row.get('total') is not None else bucket_sum
    return totals


class QuoteConverterAPI:
    """API client for the quote conversion backend"""

    def __init__(self, base_url: str = BACKEND_URL, max_direct_mb: float = 4, chunk_size_mb: float = 3):
        self.base_url = base_url
        self.max_direct_bytes = int(max_direct_mb * MB)
        self.chunk_size = int(chunk_size_mb * MB)

    @classmethod
    def from_config(cls, config: Dict[str, Any], base_url: str = BACKEND_URL) -> 'QuoteConverterAPI':
        """Client using the server's upload limits from /api/config/inquiry"""
        upload = (config.get('configs') or {}).get('upload') or {}
        return cls(
            base_url=base_url,
            max_direct_mb=upload.get('max_direct_upload_mb', 4),
            chunk_size_mb=upload.get('chunk_size_mb', 3)
        )

    def check_connection(self) -> bool:
        try:
            response = requests.get(f"{self.base_url}/api/config/inquiry", timeout=2)
            return response.status_code == 200
        except requests.RequestException:
            return False

    def get_config(self) -> Dict[str, Any]:
        try:
            response = requests.get(f"{self.base_url}/api/config/inquiry", timeout=5)
            return response.json()
        except (requests.RequestException, ValueError) as e:
            return {'success': False, 'error': str(e)}

    def upload_in_chunks(self, file_name: str, data: bytes) -> str:
        """Send data in chunks; returns the upload id once the server has it all"""
        upload_id = uuid.uuid4().hex
        total_chunks = max(1, -(-len(data) // self.chunk_size))

        for index, chunk in iter_chunks(data, self.chunk_size):
            response = requests.post(
                f"{self.base_url}/api/upload-chunk",
                files={'chunk': (file_name, chunk)},
                data={
                    'chunkIndex': index,
                    'totalChunks': total_chunks,
                    'uploadId': upload_id,
                    'fileName': file_name
                }
            )
            result = response.json()
            if not response.ok:
                raise RuntimeError(result.get('error') or f"Failed to upload chunk {index + 1} of {total_chunks}")
            if result.get('complete'):
                break
        return upload_id

    def convert(self, file_name: str, data: bytes) -> Dict[str, Any]:
        """Convert a workbook; large files go through the chunked upload"""
        try:
            if len(data) > self.max_direct_bytes:
                upload_id = self.upload_in_chunks(file_name, data)
                response = requests.post(f"{self.base_url}/api/convert", data={'uploadId': upload_id})
            else:
                response = requests.post(f"{self.base_url}/api/convert", files={'file': (file_name, data)})
        except (requests.RequestException, RuntimeError) as e:
            return {'success': False, 'error': str(e)}

        if response.status_code == 413:
            return {'success': False, 'error': 'File is too large. Please try a smaller file.'}
        try:
            result = response.json()
        except ValueError:
            return {'success': False, 'error': 'Unexpected response format from server.'}
        if not response.ok:
            return {'success': False, 'error': result.get('error', 'Conversion failed. Please try again.')}
        if not isinstance(result.get('rooms'), list):
            return {'success': False, 'error': 'Unexpected response format from server.'}
        return {'success': True, 'quote': result}


def show_meta_fields(meta: Dict[str, Any]):
    """Editable header fields; edits live in the session only"""
    st.subheader(get_text('quote_details'))
    edited = st.session_state.setdefault('meta_edits', {})
    columns = st.columns(2)
    for index, (key, label) in enumerate(META_FIELDS):
        with columns[index % 2]:
            edited[key] = st.text_input(label, value=edited.get(key, meta.get(key) or ""), key=f"meta_{key}")
    st.metric("Total Project Cost", format_money(meta.get('totalProjectCost')))


def show_room(room: Dict[str, Any]):
    with st.expander(room['name'], expanded=True):
        for entry in room['types']:
            st.markdown(f"#### {entry['label']}")
            stats = entry['stats']
            col1, col2, col3, col4 = st.columns(4)
            col1.metric("Area (sq.ft)", format_number(stats['areaSqFt']))
            col2.metric("Cost / sq.ft", format_money(stats['costPerSqFt']))
            col3.metric("Total", format_money(stats['total']))
            col4.metric("Width (mm)", format_number(entry['dimensionAggregate']))

            if entry['materials']:
                st.table(pd.DataFrame(list(entry['materials'].items()), columns=['Material', 'Specification']))
            if entry['items']:
                items = pd.DataFrame(entry['items'])
                items['price'] = items['price'].map(format_money)
                st.dataframe(items, hide_index=True)


def show_summary(summary: Optional[Dict[str, Any]]):
    if not summary:
        return
    rows = summary.get('rows', [])
    if not rows and summary.get('subtotal') is None and summary.get('totalPayable') is None:
        return

    st.subheader(get_text('financial_summary'))
    if rows:
        table = pd.DataFrame(rows)
        totals = summary_totals(rows)
        table.loc[len(table)] = {'room': 'Total', **totals}
        for column in SUMMARY_BUCKETS + ['total']:
            table[column] = table[column].map(format_money)
        st.dataframe(table, hide_index=True)

    before_discount = summary.get('subtotal')
    if before_discount is None and rows:
        before_discount = summary_totals(rows)['total']

    col1, col2, col3 = st.columns(3)
    col1.metric(get_text('before_discount'), format_money(before_discount))
    if summary.get('discount'):
        col2.metric(get_text('discount'), format_money(summary['discount']))
    col3.metric(get_text('total_payable'), format_money(summary.get('totalPayable')))


def main():
    st.set_page_config(page_title="Interior Quote Converter", page_icon="🛋️", layout="wide")
    st.title(get_text('title'))
    st.caption(get_text('subtitle'))

    api = QuoteConverterAPI()
    if not api.check_connection():
        st.error(get_text('backend_error'))
        st.markdown(get_text('backend_instruction'))
        return

    api = QuoteConverterAPI.from_config(api.get_config(), base_url=api.base_url)

    upload = st.file_uploader(get_text('file_upload'), type=['xlsx', 'xlsm', 'xls'])
    if upload is not None and st.button(get_text('convert'), type="primary"):
        with st.spinner(get_text('converting')):
            result = api.convert(upload.name, upload.getvalue())
        if result['success']:
            st.session_state['quote'] = result['quote']
            st.session_state['pdf_name'] = to_pdf_filename(upload.name)
            st.session_state['meta_edits'] = {}
            st.success(get_text('convert_success'))
        else:
            st.error(get_text('convert_failed').format(result['error']))

    quote = st.session_state.get('quote')
    if not quote:
        return

    st.info(get_text('pdf_name').format(st.session_state.get('pdf_name')))
    show_meta_fields(quote['meta'])
    for room in quote['rooms']:
        show_room(room)
    show_summary(quote.get('summary'))


if __name__ == "__main__":
    main()
