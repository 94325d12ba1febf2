#!/usr/bin/env python3
"""
Pydantic models for the upload API requests and responses.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional


class UploadChunkRequest(BaseModel):
    """Form fields of POST /api/upload-chunk"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    upload_id: str = Field(..., min_length=1)
    chunk_index: int = Field(..., ge=0)
    total_chunks: int = Field(..., gt=0)
    file_name: str = "upload.xlsx"


class UploadChunkResponse(BaseModel):
    """Response model for /api/upload-chunk"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool
    upload_id: str
    complete: bool
    received: Optional[int] = None
    total: Optional[int] = None
    message: Optional[str] = None

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
