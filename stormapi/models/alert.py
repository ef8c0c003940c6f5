"""Active alert model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AlertRecord:
    event: str
    severity: str
    description: str
    instruction: str
    effective: str
    expires: str
