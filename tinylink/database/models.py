"""Data models for the link store."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class Link:
    """A short code and the URL it redirects to."""

    short_code: str
    target_url: str
    created_at: datetime
    total_clicks: int = 0
    last_clicked_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        """Convert to a JSON-friendly dictionary."""
        return {
            "short_code": self.short_code,
            "target_url": self.target_url,
            "total_clicks": self.total_clicks,
            "last_clicked_at": self.last_clicked_at.isoformat() if self.last_clicked_at else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Link":
        """Create from a database row or a decoded API payload."""
        created_at = record["created_at"]
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)
        last_clicked_at = record.get("last_clicked_at")
        if isinstance(last_clicked_at, str):
            last_clicked_at = datetime.fromisoformat(last_clicked_at)
        return cls(
            short_code=record["short_code"],
            target_url=record["target_url"],
            created_at=created_at,
            total_clicks=record.get("total_clicks") or 0,
            last_clicked_at=last_clicked_at,
        )
