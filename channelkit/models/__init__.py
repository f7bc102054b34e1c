"""Data models."""

from .artifact import Artifact
from .history import HistoryItem
from .job import JobHandle, JobStatus, Phase
from .request import (
    AboutPayload,
    AssetKind,
    BannerPayload,
    DescriptionPayload,
    GenerationRequest,
    IntroPayload,
    LogoPayload,
    ReferenceImage,
    ThumbnailPayload,
)

__all__ = [
    "AboutPayload",
    "Artifact",
    "AssetKind",
    "BannerPayload",
    "DescriptionPayload",
    "GenerationRequest",
    "HistoryItem",
    "IntroPayload",
    "JobHandle",
    "JobStatus",
    "LogoPayload",
    "Phase",
    "ReferenceImage",
    "ThumbnailPayload",
]
