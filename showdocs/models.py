"""Core data models shared across showdocs components."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Optional


class PageKind(str, Enum):
    """How a file found in the input tree is handled."""

    API = "api"
    SERIALIZED_FORM = "serialized-form"
    IGNORED = "ignored"


class RenderMode(str, Enum):
    """Content encoding applied to every description in a run."""

    HTML = "html"
    TEXT = "text"
    MIXED = "mixed"


@dataclass(frozen=True)
class DocPage:
    """A candidate documentation page discovered in the input tree."""

    path: Path
    relative_path: Path
    kind: PageKind

    @property
    def title(self) -> str:
        return str(self.relative_path)


@dataclass
class APIDescription:
    """Descriptions extracted from a type, package or module page."""

    declaration_names: Dict[str, str] = field(default_factory=dict)
    description: Optional[str] = None
    member_descriptions: Dict[str, str] = field(default_factory=dict)


@dataclass
class SerializedFormBundle:
    """Serialized-form descriptions for a single serializable type."""

    overview: Optional[str] = None
    serial_version_uid: Optional[str] = None
    field_descriptions: Dict[str, str] = field(default_factory=dict)
    method_descriptions: Dict[str, str] = field(default_factory=dict)

    def entry_names(self) -> list[str]:
        """Return a compact list of the entries present, for diagnostics."""
        names: list[str] = []
        if self.overview is not None:
            names.append("overview")
        if self.serial_version_uid is not None:
            names.append("svuid")
        names.extend(self.field_descriptions)
        names.extend(self.method_descriptions)
        return names
