"""Pipeline orchestration for a showdocs conversion run."""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional

from .config import ConfigError, ShowDocsConfig
from .correlation import BundleReader, CorrelationIndex
from .extract import ExtractionError, read_api_description, read_serialized_form_bundles
from .logging import get_logger
from .models import APIDescription, DocPage, PageKind, SerializedFormBundle
from .render import DEFAULT_STYLESHEET, SERIALIZED_FORMS_TITLE, Renderer
from .selector import TreeSelector

STYLESHEET_RESOURCE = Path(__file__).with_name("static") / DEFAULT_STYLESHEET

APIReader = Callable[[Path], APIDescription]


@dataclass
class PageFailure:
    """A page that produced no output, with the reason."""

    path: Path
    message: str


@dataclass
class RunResult:
    """Outcome of a conversion run."""

    output_dir: Path
    written: List[Path] = field(default_factory=list)
    failures: List[PageFailure] = field(default_factory=list)
    stylesheet_error: Optional[str] = None


class Orchestrator:
    """Coordinates selection, extraction, correlation and rendering of a docs tree."""

    def __init__(
        self,
        config: ShowDocsConfig | None = None,
        *,
        selector: TreeSelector | None = None,
        renderer: Renderer | None = None,
        api_reader: APIReader = read_api_description,
        bundle_reader: BundleReader = read_serialized_form_bundles,
    ) -> None:
        self.config = config or ShowDocsConfig()
        self.selector = selector or TreeSelector()
        self.renderer = renderer or Renderer(self.config.mode, stylesheet=self.config.stylesheet)
        self.api_reader = api_reader
        self.bundle_reader = bundle_reader
        self.logger = get_logger("orchestrator")

    def run(self, input_path: str | Path) -> RunResult:
        """Convert every selected page under ``input_path`` into the output directory.

        Raises ``IndexBuildError`` when the root serialized-form page cannot be
        read; failures on individual pages are recorded in the result instead.
        """
        input_root = Path(input_path).expanduser()
        if not input_root.exists():
            raise FileNotFoundError(f"Input path not found: {input_path}")
        output_dir = self.config.output_dir
        if output_dir is None:
            raise ConfigError("no output directory specified")

        self.logger.debug("Converting %s into %s (%s mode)", input_root, output_dir, self.renderer.mode.value)

        index = CorrelationIndex.build(input_root, self.bundle_reader)
        if index is not None:
            self.logger.debug("Indexed %d serialized forms from %s", len(index), index.source)

        result = RunResult(output_dir=output_dir)
        for page in self.selector.select(input_root):
            self.logger.debug("file: %s", page.path)
            out_file = output_dir / page.relative_path
            try:
                html = self._render_page(page, index)
                self._write(out_file, html)
            except (ExtractionError, OSError) as exc:
                self._log_exception(f"Failed to convert {page.path}", exc)
                result.failures.append(PageFailure(path=page.path, message=str(exc)))
                continue
            result.written.append(out_file)

        result.stylesheet_error = self._copy_stylesheet(output_dir)

        self.logger.debug(
            "Wrote %d pages to %s (%d failed)",
            len(result.written),
            output_dir,
            len(result.failures),
        )
        return result

    def _render_page(self, page: DocPage, index: Optional[CorrelationIndex]) -> str:
        if page.kind is PageKind.SERIALIZED_FORM:
            if index is not None and page.path == index.source:
                bundles = index.bundles()
            else:
                bundles = self.bundle_reader(page.path)
            self._trace_bundles(bundles)
            return self.renderer.render_serialized_form_index(
                SERIALIZED_FORMS_TITLE, page.relative_path, bundles
            )

        description = self.api_reader(page.path)
        self._trace_description(description)
        bundle = index.lookup(description) if index is not None else None
        return self.renderer.render_api_page(page.title, page.relative_path, description, bundle)

    @staticmethod
    def _write(out_file: Path, html: str) -> None:
        out_file.parent.mkdir(parents=True, exist_ok=True)
        out_file.write_text(html, encoding="utf-8")

    def _copy_stylesheet(self, output_dir: Path) -> Optional[str]:
        target = output_dir / self.renderer.stylesheet
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(STYLESHEET_RESOURCE, target)
        except OSError as exc:
            self.logger.error("Error writing stylesheet %s: %s", target, exc)
            return str(exc)
        return None

    def _trace_description(self, description: APIDescription) -> None:
        if not self.logger.isEnabledFor(logging.DEBUG):
            return
        self.logger.debug("APIDocs: %s", _short_text(description.description))
        self.logger.debug("APIDocs: %s", list(description.member_descriptions))
        for signature, text in description.member_descriptions.items():
            self.logger.debug("%s: %s", _short_text(signature), _short_text(text))

    def _trace_bundles(self, bundles: Dict[str, SerializedFormBundle]) -> None:
        if not self.logger.isEnabledFor(logging.DEBUG):
            return
        for type_name, bundle in bundles.items():
            self.logger.debug("%s: %s", type_name, _short_text(",".join(bundle.entry_names())))

    def _log_exception(self, message: str, exc: Exception) -> None:
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.exception("%s: %s", message, exc)
        else:
            self.logger.error("%s: %s", message, exc)


def _short_text(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None
    return text[:10]


__all__ = ["Orchestrator", "PageFailure", "RunResult", "STYLESHEET_RESOURCE"]
