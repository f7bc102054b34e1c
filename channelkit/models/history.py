"""History item - persisted record of a completed generation."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from .request import AssetKind
from ..utils import download_filename


@dataclass(frozen=True)
class HistoryItem:
    id: str
    type: AssetKind
    artifact_ref: str  # local path of the saved artifact
    prompt: str
    created_at: datetime

    @property
    def download_filename(self) -> str:
        """Filename offered when the artifact is downloaded/exported."""
        if self.type is AssetKind.INTRO:
            extension = "mp4"
        elif self.type.is_text:
            extension = "txt"
        else:
            extension = "png"
        return download_filename(self.type.value, self.id, extension)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "artifact_ref": self.artifact_ref,
            "prompt": self.prompt,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HistoryItem":
        return cls(
            id=data["id"],
            type=AssetKind(data["type"]),
            artifact_ref=data.get("artifact_ref", ""),
            prompt=data.get("prompt", ""),
            created_at=datetime.fromisoformat(data["created_at"]),
        )


def now_utc() -> datetime:
    return datetime.now(timezone.utc)
