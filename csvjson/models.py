from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import BinaryIO, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


ConversionRecord = Dict[str, Optional[str]]
ConversionResult = List[ConversionRecord]


@dataclass
class UploadedFile:
    """File descriptor handed over by whoever picked the file."""

    name: str
    mime_type: str
    size_bytes: int
    content: Union[bytes, BinaryIO] = b""


@dataclass
class ParsedTable:
    header: List[str]
    rows: List[List[str]] = field(default_factory=list)


class SessionStatus(str, Enum):
    IDLE = "idle"
    FILE_SELECTED = "file_selected"
    CONVERTING = "converting"
    READY = "ready"
    ERROR = "error"


class ConversionSummary(BaseModel):
    records: int = 0
    fields: int = 0
    short_rows: int = 0
    long_rows: int = 0


class SessionState(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: SessionStatus = SessionStatus.IDLE
    progress_percent: float = Field(default=0.0, ge=0.0, le=100.0)
    error_message: Optional[str] = None
    result: Optional[ConversionResult] = None
    summary: Optional[ConversionSummary] = None


class SessionResponse(BaseModel):
    status: SessionStatus
    progress_percent: float = 0.0
    error_message: Optional[str] = None
    file_name: Optional[str] = None
    summary: Optional[ConversionSummary] = None
    download_ready: bool = False


class HealthResponse(BaseModel):
    ok: bool = True
