"""Simplified description pages for javadoc-generated API documentation."""

from .models import APIDescription, DocPage, PageKind, RenderMode, SerializedFormBundle
from .orchestrator import Orchestrator, RunResult

__all__ = [
    "APIDescription",
    "DocPage",
    "Orchestrator",
    "PageKind",
    "RenderMode",
    "RunResult",
    "SerializedFormBundle",
]
