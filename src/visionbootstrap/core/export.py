"""Standalone documents built from a component variation.

Three renderings of a variation are produced here:

- the exported document: a complete Bootstrap page the user downloads
- the preview document: the same shell rendered inside a sandboxed iframe
- the source listing: markup and styles shown in the code viewer

Variation markup and styles are inserted verbatim; they are never parsed or
validated.
"""

from __future__ import annotations

import html
import logging
import re
from pathlib import Path

from visionbootstrap.core.models import ComponentVariation, GeneratedProject

logger = logging.getLogger(__name__)

BOOTSTRAP_CSS_URL = "https://cdn.jsdelivr.net/npm/bootstrap@5.3.2/dist/css/bootstrap.min.css"
BOOTSTRAP_JS_URL = "https://cdn.jsdelivr.net/npm/bootstrap@5.3.2/dist/js/bootstrap.bundle.min.js"

MOBILE_FRAME_WIDTH = 375

EXPORT_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
    <link href="{css_url}" rel="stylesheet">
    <style>
        body {{ padding: 40px 0; background: #ffffff; min-height: 100vh; }}
        {css}
    </style>
</head>
<body>
    <div class="container">
        {html}
    </div>
    <script src="{js_url}"></script>
</body>
</html>"""

PREVIEW_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <link href="{css_url}" rel="stylesheet">
  <style>
    body {{ padding: 20px; background: #ffffff; min-height: 100vh; }}
    {css}
  </style>
</head>
<body>
  {html}
  <script src="{js_url}"></script>
</body>
</html>"""

_WHITESPACE_RUN = re.compile(r"\s+")
_UNSAFE_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*]')

# Applies to the slug only; the "-vN.html" suffix is always appended
MAX_FILENAME_STEM = 100


def build_export_document(project: GeneratedProject, variation: ComponentVariation) -> str:
    """Wrap a variation in the downloadable page shell."""
    return EXPORT_TEMPLATE.format(
        title=html.escape(f"{project.name} - {variation.theme_name}"),
        css_url=BOOTSTRAP_CSS_URL,
        js_url=BOOTSTRAP_JS_URL,
        css=variation.css,
        html=variation.html,
    )


def export_filename(project_name: str, variation_index: int) -> str:
    """File name for an exported variation.

    Whitespace runs become single hyphens, the result is lower-cased, and the
    1-based variation number is appended: ``"My Card", 0 -> "my-card-v1.html"``.
    Path separators and other reserved characters in the slug become
    underscores, so names like "Tech / SaaS Project" stay in the export
    directory. Long slugs are cut to ``MAX_FILENAME_STEM`` before the suffix.
    """
    slug = _WHITESPACE_RUN.sub("-", project_name).lower()
    slug = _UNSAFE_FILENAME_CHARS.sub("_", slug)[:MAX_FILENAME_STEM]
    return f"{slug}-v{variation_index + 1}.html"


def build_preview_document(markup: str, css: str) -> str:
    """Page shell rendered inside the sandboxed preview frame."""
    return PREVIEW_TEMPLATE.format(
        css_url=BOOTSTRAP_CSS_URL,
        js_url=BOOTSTRAP_JS_URL,
        css=css,
        html=markup,
    )


def build_preview_frame(variation: ComponentVariation | None, device_frame: str = "desktop") -> str:
    """Sandboxed iframe embedding the preview document for display."""
    if variation is None:
        return '<div class="vbs-void">Synthesis Void</div>'

    width = f"{MOBILE_FRAME_WIDTH}px" if device_frame == "mobile" else "100%"
    srcdoc = html.escape(build_preview_document(variation.html, variation.css), quote=True)
    return (
        f'<iframe title="preview" sandbox="allow-scripts" srcdoc="{srcdoc}" '
        f'style="width: {width}; height: 80vh; border: none; background: #ffffff; '
        f'display: block; margin: 0 auto;"></iframe>'
    )


def build_source_listing(
    project: GeneratedProject, variation_index: int, variation: ComponentVariation
) -> str:
    """Combined markup and style text shown in source mode."""
    return (
        f"<!-- {project.name} - V{variation_index + 1} -->\n"
        f"{variation.html}\n\n/* STYLE */\n{variation.css}"
    )


def write_export(
    project: GeneratedProject,
    variation_index: int,
    export_dir: Path,
    filename: str | None = None,
) -> Path:
    """Write the exported document for one variation and return its path.

    Args:
        project: Project owning the variation.
        variation_index: Zero-based variation index.
        export_dir: Destination directory.
        filename: File name override (defaults to :func:`export_filename`).

    Raises:
        IndexError: If ``variation_index`` is out of range.
    """
    variation = project.variation(variation_index)
    if variation is None:
        raise IndexError(f"Project {project.id} has no variation {variation_index + 1}")

    export_dir.mkdir(parents=True, exist_ok=True)
    path = export_dir / (filename or export_filename(project.name, variation_index))
    path.write_text(build_export_document(project, variation), encoding="utf-8")
    logger.info(f"Exported {project.name!r} V{variation_index + 1} to {path}")
    return path
