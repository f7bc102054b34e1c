"""Generation job engine."""

from .orchestrator import JobOrchestrator

__all__ = ["JobOrchestrator"]
