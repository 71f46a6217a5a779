"""Domain entity representing a CRM deal snapshot."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

DEAL_STAGE_LEAD = "lead"
DEAL_STAGE_QUALIFIED = "qualified"
DEAL_STAGE_PROPOSAL = "proposal"
DEAL_STAGE_NEGOTIATION = "negotiation"
DEAL_STAGE_CLOSED_WON = "closed-won"
DEAL_STAGE_CLOSED_LOST = "closed-lost"

CLOSED_DEAL_STAGES = frozenset({DEAL_STAGE_CLOSED_WON, DEAL_STAGE_CLOSED_LOST})


def _as_number(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


@dataclass(frozen=True)
class Deal:
    """Read-only view of a deal owned by the CRM data layer."""

    id: str
    name: str
    close_date: datetime | date | str | None
    stage: str
    probability: float = 0
    value: float = 0

    @property
    def is_closed(self) -> bool:
        return self.stage in CLOSED_DEAL_STAGES

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Deal":
        """Build a deal from a camelCase snapshot record."""

        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name") or ""),
            close_date=data.get("closeDate", data.get("close_date")),
            stage=str(data.get("stage") or ""),
            probability=_as_number(data.get("probability")),
            value=_as_number(data.get("value")),
        )


__all__ = [
    "Deal",
    "CLOSED_DEAL_STAGES",
    "DEAL_STAGE_LEAD",
    "DEAL_STAGE_QUALIFIED",
    "DEAL_STAGE_PROPOSAL",
    "DEAL_STAGE_NEGOTIATION",
    "DEAL_STAGE_CLOSED_WON",
    "DEAL_STAGE_CLOSED_LOST",
]
