#!/usr/bin/env python3
"""
Pydantic models for the converter configuration system.
These models define the sheet conventions the parser relies on and the
limits of the upload transport.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, List, Optional
from enum import Enum


class ConfigSection(str, Enum):
    """Enum for configuration sections"""
    PARSER = "parser"
    UPLOAD = "upload"


class ParserConfig(BaseModel):
    """Sheet naming conventions and numeric tolerances used during extraction"""
    summary_sheet_name: str = Field("Summary", min_length=1, description="Sheet holding materials and totals")
    skipped_sheet_names: List[str] = Field(
        default_factory=lambda: ["Summary", "Terms & Conditions"],
        description="Sheets never aggregated into rooms"
    )
    discount_noise_threshold: float = Field(0.001, ge=0, description="Smallest derived discount kept")

    @field_validator('summary_sheet_name')
    def validate_summary_sheet_name(cls, v):
        if not v.strip():
            raise ValueError("Summary sheet name cannot be empty")
        return v.strip()


class UploadConfig(BaseModel):
    """Upload transport limits"""
    max_direct_upload_mb: float = Field(4, gt=0, description="Larger files are sent in chunks")
    chunk_size_mb: float = Field(3, gt=0, description="Chunk size used by the preview client")
    chunk_expiry_seconds: int = Field(600, gt=0, description="Unfinished uploads are dropped after this")


class AppConfigs(BaseModel):
    """Complete configuration"""
    parser: ParserConfig = Field(default_factory=ParserConfig)
    upload: UploadConfig = Field(default_factory=UploadConfig)

    @classmethod
    def get_default_config(cls) -> 'AppConfigs':
        """Get default configuration for all sections"""
        return cls(parser=ParserConfig(), upload=UploadConfig())


class ConfigUpdateRequest(BaseModel):
    """Request model for updating one configuration section"""
    section: ConfigSection = Field(..., description="Section to update")
    values: Dict[str, Any] = Field(..., description="Field name -> new value")

    @field_validator('values')
    def validate_values(cls, v):
        if not v:
            raise ValueError("At least one value must be provided")
        return v


class ConfigInquiryResponse(BaseModel):
    """Response model for configuration inquiry"""
    success: bool
    configs: Optional[AppConfigs] = None
    error: Optional[str] = None


class ConfigUpdateResponse(BaseModel):
    """Response model for configuration update"""
    success: bool
    message: str
    updated_section: Optional[str] = None
    error: Optional[str] = None
