#!/usr/bin/env python3
"""
Models package for the quote converter.
"""

from .config_models import (
    ConfigSection,
    ParserConfig,
    UploadConfig,
    AppConfigs,
    ConfigUpdateRequest,
    ConfigInquiryResponse,
    ConfigUpdateResponse
)
from .quote_models import (
    MaterialsBlock,
    CabinetStats,
    DetailItem,
    SummaryFinancialRow,
    QuoteSummary,
    QuoteMetadata,
    TypeStats,
    TypeEntry,
    RoomResponse,
    ConvertResponse
)
from .api_models import UploadChunkRequest, UploadChunkResponse

__all__ = [
    "ConfigSection",
    "ParserConfig",
    "UploadConfig",
    "AppConfigs",
    "ConfigUpdateRequest",
    "ConfigInquiryResponse",
    "ConfigUpdateResponse",
    "MaterialsBlock",
    "CabinetStats",
    "DetailItem",
    "SummaryFinancialRow",
    "QuoteSummary",
    "QuoteMetadata",
    "TypeStats",
    "TypeEntry",
    "RoomResponse",
    "ConvertResponse",
    "UploadChunkRequest",
    "UploadChunkResponse"
]
