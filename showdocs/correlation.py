"""Run-wide index of serialized-form descriptions keyed by type name."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Iterator, Mapping, Optional

from .extract import ExtractionError, read_serialized_form_bundles
from .models import APIDescription, SerializedFormBundle
from .selector import SERIALIZED_FORM_FILENAME

BundleReader = Callable[[Path], Dict[str, SerializedFormBundle]]


class IndexBuildError(RuntimeError):
    """Raised when the root serialized-form page exists but cannot be read."""


def type_key(declaration_names: Mapping[str, str]) -> Optional[str]:
    """Return the fully-qualified type name for a declaration, if it names a class.

    Classes in the default package are keyed by their simple name.
    """
    class_name = declaration_names.get("class")
    if class_name is None:
        return None
    package = declaration_names.get("package")
    if package:
        return f"{package}.{class_name}"
    return class_name


class CorrelationIndex:
    """Read-only mapping of type name to serialized-form bundle."""

    def __init__(self, bundles: Mapping[str, SerializedFormBundle], source: Path | None = None) -> None:
        self._bundles: Dict[str, SerializedFormBundle] = dict(bundles)
        self.source = source

    @classmethod
    def build(
        cls,
        input_root: Path,
        reader: BundleReader = read_serialized_form_bundles,
    ) -> Optional["CorrelationIndex"]:
        """Return an index from ``input_root/serialized-form.html``, or None when there is none."""
        if not input_root.is_dir():
            return None
        source = input_root / SERIALIZED_FORM_FILENAME
        if not source.is_file():
            return None
        try:
            bundles = reader(source)
        except (ExtractionError, OSError) as exc:
            raise IndexBuildError(f"Failed to read serialized forms from {source}: {exc}") from exc
        return cls(bundles, source=source)

    def lookup(self, description: APIDescription) -> Optional[SerializedFormBundle]:
        key = type_key(description.declaration_names)
        if key is None:
            return None
        return self._bundles.get(key)

    def bundles(self) -> Dict[str, SerializedFormBundle]:
        """Return a copy of the indexed bundles in page order."""
        return dict(self._bundles)

    def __contains__(self, type_name: object) -> bool:
        return type_name in self._bundles

    def __iter__(self) -> Iterator[str]:
        return iter(self._bundles)

    def __len__(self) -> int:
        return len(self._bundles)


__all__ = ["BundleReader", "CorrelationIndex", "IndexBuildError", "type_key"]
