#!/usr/bin/env python3
"""
Pydantic models for the structured quote.
Attributes are snake_case in Python and camelCase on the wire; every model is
frozen once built so assembled quotes cannot drift after assembly.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Dict, List, Optional


class QuoteModel(BaseModel):
    """Shared config: camelCase aliases, immutable instances"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class MaterialsBlock(QuoteModel):
    """Materials text for one cabinet type, e.g. {'Carcass': '18mm BWP Ply'}"""
    label: str
    fields: Dict[str, str] = Field(default_factory=dict)


class CabinetStats(QuoteModel):
    """Area/cost figures for one cabinet type; None means not stated"""
    area: Optional[float] = None
    cost_per_sq_ft: Optional[float] = None
    total: Optional[float] = None

    def merged(self, newer: "CabinetStats") -> "CabinetStats":
        """Fields set on newer win, blanks included; fields never set keep what is already known"""
        updates = {name: getattr(newer, name) for name in newer.model_fields_set}
        return self.model_copy(update=updates)


class DetailItem(QuoteModel):
    """One priced line item from a details sheet"""
    code: str = ""
    description: str
    size: str = ""
    price: Optional[float] = None


class SummaryFinancialRow(QuoteModel):
    """One room line of the Summary sheet totals table"""
    room: str
    modules: float = 0
    accessories: float = 0
    appliances: float = 0
    services: float = 0
    furniture: float = 0
    total: Optional[float] = None


class QuoteSummary(QuoteModel):
    rows: List[SummaryFinancialRow] = Field(default_factory=list)
    subtotal: Optional[float] = None
    total_payable: Optional[float] = None
    discount: Optional[float] = None


class QuoteMetadata(QuoteModel):
    """Header fields of the quote; each one independently optional"""
    reference: Optional[str] = None
    customer: Optional[str] = None
    designer_name: Optional[str] = None
    designer_email: Optional[str] = None
    designer_phone: Optional[str] = None
    quote_date: Optional[str] = None
    quote_valid_till: Optional[str] = None
    price_version: Optional[str] = None
    property_name: Optional[str] = None
    total_built_up_area: Optional[str] = None
    property_config: Optional[str] = None
    quote_status: Optional[str] = None
    address: Optional[str] = None
    quote_number: Optional[str] = None
    total_project_cost: Optional[float] = None


class TypeStats(QuoteModel):
    area_sq_ft: Optional[float] = None
    cost_per_sq_ft: Optional[float] = None
    total: Optional[float] = None


class TypeEntry(QuoteModel):
    """Everything known about one cabinet type within a room"""
    type: str
    label: str
    materials: Dict[str, str] = Field(default_factory=dict)
    stats: TypeStats = Field(default_factory=TypeStats)
    dimension_aggregate: Optional[float] = None
    items: List[DetailItem] = Field(default_factory=list)


class RoomResponse(QuoteModel):
    name: str
    types: List[TypeEntry] = Field(default_factory=list)


class ConvertResponse(QuoteModel):
    """Response model for /api/convert"""
    rooms: List[RoomResponse]
    meta: QuoteMetadata
    summary: Optional[QuoteSummary] = None

    def to_payload(self) -> dict:
        """JSON-ready dict; absent values stay as explicit nulls"""
        return self.model_dump(by_alias=True)
