"""Renders extracted descriptions into simplified HTML pages."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Dict, Mapping, Optional

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup

from .models import APIDescription, RenderMode, SerializedFormBundle

DEFAULT_STYLESHEET = "showDocs.css"
GENERATOR = "showDocs"
SERIALIZED_FORMS_TITLE = "Serialized Forms"


def path_to_root(relative_path: Path) -> str:
    """Return the relative path from the directory of ``relative_path`` back to the root."""
    parent = Path(relative_path).parent
    if parent == Path("."):
        return "."
    return os.sep.join(".." for _ in parent.parts)


def declaration_line(declaration_names: Mapping[str, str]) -> str:
    pairs = ", ".join(f"{key}: {value}" for key, value in declaration_names.items())
    return f"Declaration: {pairs}"


def _html_content(text: str) -> Markup:
    return Markup('<div class="html">{}</div>').format(Markup(text))


def _text_content(text: str) -> Markup:
    return Markup('<pre class="text">{}</pre>').format(text)


def _mixed_content(text: str) -> Markup:
    return Markup("<div>{}<details><summary>Source</summary>{}</details></div>").format(
        _html_content(text), _text_content(text)
    )


_CONTENT_RENDERERS: Dict[RenderMode, Callable[[str], Markup]] = {
    RenderMode.HTML: _html_content,
    RenderMode.TEXT: _text_content,
    RenderMode.MIXED: _mixed_content,
}


class Renderer:
    """Builds output documents for API pages and serialized-form pages.

    The render mode is fixed per instance, so every description written by
    one renderer uses the same encoding.
    """

    def __init__(
        self,
        mode: RenderMode = RenderMode.MIXED,
        *,
        stylesheet: str = DEFAULT_STYLESHEET,
        templates_dir: Path | None = None,
    ) -> None:
        self.mode = RenderMode(mode)
        self.stylesheet = stylesheet
        self._content = _CONTENT_RENDERERS[self.mode]
        self.templates_dir = templates_dir or Path(__file__).with_name("templates")
        self._env = self._create_env(self.templates_dir)

    def render_content(self, text: str) -> Markup:
        """Encode a single description according to the run's mode."""
        return self._content(text)

    def stylesheet_href(self, relative_path: Path) -> str:
        return os.path.join(path_to_root(relative_path), self.stylesheet)

    def render_api_page(
        self,
        title: str,
        relative_path: Path,
        description: APIDescription,
        bundle: Optional[SerializedFormBundle] = None,
    ) -> str:
        """Render the descriptions of one type, package or module page."""
        members = sorted(description.member_descriptions.items())
        return self._render(
            "api_page.html.j2",
            title=title,
            stylesheet=self.stylesheet_href(relative_path),
            declaration=declaration_line(description.declaration_names),
            description=description.description,
            members=members,
            bundle=bundle,
        )

    def render_serialized_form_index(
        self,
        title: str,
        relative_path: Path,
        bundles: Mapping[str, SerializedFormBundle],
    ) -> str:
        """Render every serialized-form bundle found on a serialized-form page."""
        return self._render(
            "serialized_forms.html.j2",
            title=title,
            stylesheet=self.stylesheet_href(relative_path),
            bundles=list(bundles.items()),
        )

    def _render(self, template_name: str, **context: object) -> str:
        template = self._env.get_template(template_name)
        return template.render(generator=GENERATOR, **context) + "\n"

    def _create_env(self, templates_dir: Path) -> Environment:
        env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        env.filters["content"] = self.render_content
        return env


__all__ = [
    "DEFAULT_STYLESHEET",
    "GENERATOR",
    "Renderer",
    "SERIALIZED_FORMS_TITLE",
    "declaration_line",
    "path_to_root",
]
