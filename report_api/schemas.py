from enum import Enum
from typing import Any
from pydantic import BaseModel, ConfigDict, Field

class DetailLevel(str, Enum):
    STANDARD = "standard"
    DETAILED = "detailed"

class ReportRequest(BaseModel):
    """
    Body of POST /api/generate-report. Every field is optional at the schema
    level so a missing required field becomes our own 400 message rather than
    a framework validation dump; the service enforces presence.
    """
    model_config = ConfigDict(populate_by_name=True)

    address: str | None = None
    property_type: str | None = Field(default=None, alias="propertyType")
    # Interpolated into the prompt as sent; no range or type checks here
    surface: Any = None
    year_built: Any = Field(default=None, alias="yearBuilt")
    notes: str | None = None
    extra_context: str | None = Field(default=None, alias="extraContext")
    detail_level: str | None = Field(default=None, alias="detailLevel")

class ReportResponse(BaseModel):
    result: str

class ErrorResponse(BaseModel):
    error: str
