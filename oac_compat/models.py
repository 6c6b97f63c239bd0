from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


class DocumentStatus(str, Enum):
    OK = "ok"
    WARNING = "warning"
    ERROR = "error"


class ConversionDirection(str, Enum):
    FROM_OAC = "from_oac"
    TO_OAC = "to_oac"


@dataclass
class ValidationRow:
    path: Optional[Path]
    agent: str
    status: DocumentStatus
    detail: str = ""


@dataclass
class ConversionRow:
    direction: ConversionDirection
    adapter: str
    source: Optional[Path]
    agent: str
    status: DocumentStatus
    target: Optional[Path] = None
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @classmethod
    def derive_status(cls, errors: list[str], warnings: list[str]) -> DocumentStatus:
        if errors:
            return DocumentStatus.ERROR
        if warnings:
            return DocumentStatus.WARNING
        return DocumentStatus.OK
