from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, Field


class ValidationIssue(BaseModel):
    level: str  # ERROR | WARN
    message: str
    location: Optional[str] = None


class ValidationReport(BaseModel):
    ok: bool = True
    errors: List[ValidationIssue] = Field(default_factory=list)
    warnings: List[ValidationIssue] = Field(default_factory=list)

    def add_error(self, msg: str, location: Optional[str] = None) -> None:
        self.errors.append(ValidationIssue(level="ERROR", message=msg, location=location))

    def add_warning(self, msg: str, location: Optional[str] = None) -> None:
        self.warnings.append(ValidationIssue(level="WARN", message=msg, location=location))

    def merge(self, other: "ValidationReport") -> "ValidationReport":
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        return self

    def finalize(self) -> "ValidationReport":
        self.ok = len(self.errors) == 0
        return self
