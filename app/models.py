from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class NormalizationOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    secretaria: str = Field(min_length=1, examples=["saude"])
    normalize_special_chars: bool = False
    relativize_links: bool = False
    debug: bool = True


class UrlRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    original: str
    rewritten: str = Field(alias="new")


class NormalizeRequest(BaseModel):
    html: str = ""
    options: NormalizationOptions


class NormalizeResponse(BaseModel):
    processed_html: str
    debug_output: str = ""
    urls_normalized: int = 0
    urls_processed: List[UrlRecord] = Field(default_factory=list)
    encoding: Optional[str] = Field(default=None, examples=[None])


class EnhanceRequest(BaseModel):
    html: str
    department: str = Field(min_length=1, examples=["saude"])


class EnhanceResponse(BaseModel):
    html: str


class ProcessRequest(NormalizeRequest):
    enhance: bool = True


class ProcessResponse(BaseModel):
    normalization: NormalizeResponse
    enhanced_html: Optional[str] = None
    enhancement_error: Optional[str] = None


class Department(BaseModel):
    value: str
    label: str


class HealthResponse(BaseModel):
    ok: bool = True
