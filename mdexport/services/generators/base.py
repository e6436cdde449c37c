from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime

from mdexport.domain.interfaces import IFormatGenerator, IGeneratorRegistry, IMarkdownConverter, IThemeContext
from mdexport.domain.models import (
    ColorTarget,
    ExportFormat,
    ExportOptions,
    GenerationContext,
    ThemeProbe,
)
from mdexport.services.markdown_converter import MarkdownConverter, build_table_of_contents
from mdexport.services.theme_resolver import resolve_theme_colors
from mdexport.services.watermark import inject_watermark
from mdexport.utils.constants import FALLBACK_FILENAME, HTML_TEMPLATE
from mdexport.utils.html_utils import css_font_family, escape_html, sanitize_filename

logger = logging.getLogger(__name__)

_STYLE_CLOSE_RE = re.compile(r"</(style)", re.IGNORECASE)


@dataclass
class GeneratorRegistryInst(IGeneratorRegistry):
    """
    Instance-based generator registry (no globals, no side-effects).
    Keeps registry local to the DI container for testability and clarity.
    """

    _reg: dict[ExportFormat, IFormatGenerator] = field(default_factory=dict)

    def register(self, g: IFormatGenerator) -> None:
        self._reg[ExportFormat(g.format)] = g

    def get(self, fmt: ExportFormat | str) -> IFormatGenerator:
        return self._reg[ExportFormat(fmt)]

    def all(self) -> list[IFormatGenerator]:
        return list(self._reg.values())


class BaseFormatGenerator(IFormatGenerator):
    """
    Shared document skeleton: title header, optional table of contents,
    dated footer, custom CSS appended after the format styles and the
    watermark applied last.
    """

    color_target: ColorTarget = "screen"
    protect_watermark: bool = True
    html_attrs: str = ""
    body_attrs: str = ""
    filename_suffix: str = ""

    def __init__(
        self,
        converter: IMarkdownConverter | None = None,
        theme_context: IThemeContext | None = None,
        *,
        today: Callable[[], date] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._converter = converter or MarkdownConverter()
        self._theme_context = theme_context
        self._today = today or date.today
        self._clock = clock

    # -------------------- pipeline --------------------

    def prepare(self, markdown_text: str, options: ExportOptions) -> GenerationContext:
        conversion = self._converter.to_html(markdown_text, include_metadata=True)
        if conversion.degraded:
            logger.warning("%s export uses simplified markdown conversion", self.label)
        colors = resolve_theme_colors(
            options.theme_name,
            self._probe(),
            target=self.color_target,
            explicit_theme=options.theme_name,
        )
        return GenerationContext(
            options=options,
            conversion=conversion,
            colors=colors,
            generated_on=self._today().isoformat(),
        )

    def assemble(self, ctx: GenerationContext) -> str:
        styles = self.build_styles(ctx)
        if ctx.options.custom_css.strip():
            styles += "\n/* custom */\n" + _STYLE_CLOSE_RE.sub(r"<\\/\1", ctx.options.custom_css)

        head = "\n".join(
            part
            for part in (
                f"<title>{self.document_title(ctx)}</title>",
                self.build_head_extras(ctx),
                f"<style>{styles}</style>",
            )
            if part
        )
        body = "\n".join(
            part for part in (self.build_header(ctx), self.build_body(ctx), self.build_footer(ctx)) if part
        )
        doc = HTML_TEMPLATE.format(html_attrs=self.html_attrs, head=head, body_attrs=self.body_attrs, body=body)
        return inject_watermark(
            doc,
            ctx.options.watermark_text,
            protect=self.protect_watermark,
            now=self._clock() if self._clock else None,
        )

    def suggest_filename(self, options: ExportOptions, fallback: str = FALLBACK_FILENAME) -> str:
        stem = self.filename_stem(options, fallback)
        if not self.filename_suffix:
            return sanitize_filename(stem, self.extension)
        # suffix goes on after the stem is cut to length
        return sanitize_filename(stem) + self.filename_suffix + self.extension

    def filename_stem(self, options: ExportOptions, fallback: str) -> str:
        return options.title.strip() or fallback

    # -------------------- shared parts --------------------

    def document_title(self, ctx: GenerationContext) -> str:
        return escape_html(ctx.options.title)

    def build_head_extras(self, ctx: GenerationContext) -> str:
        opts = ctx.options
        metas = [f'<meta name="author" content="{escape_html(opts.author)}">']
        if opts.description.strip():
            metas.append(f'<meta name="description" content="{escape_html(opts.description)}">')
        return "\n".join(metas)

    def build_header(self, ctx: GenerationContext) -> str:
        opts = ctx.options
        if not opts.header_footer:
            return ""
        description = (
            f'\n  <div class="description">{escape_html(opts.description)}</div>'
            if opts.description.strip()
            else ""
        )
        return (
            '<header class="doc-header">\n'
            f'  <div class="title">{escape_html(opts.title)}</div>\n'
            f'  <div class="author">by {escape_html(opts.author)}</div>'
            f"{description}\n"
            "</header>"
        )

    def build_toc(self, ctx: GenerationContext) -> str:
        if not ctx.options.include_toc:
            return ""
        return build_table_of_contents(ctx.headings)

    def build_body(self, ctx: GenerationContext) -> str:
        toc = self.build_toc(ctx)
        content = f'<main class="content">\n{ctx.conversion.html}\n</main>'
        return f"{toc}\n{content}" if toc else content

    def build_footer(self, ctx: GenerationContext) -> str:
        if not ctx.options.header_footer:
            return ""
        return (
            '<footer class="doc-footer">\n'
            f"  Generated on {ctx.generated_on} &bull; {escape_html(ctx.options.title)}\n"
            "</footer>"
        )

    def base_styles(self, ctx: GenerationContext) -> str:
        c = ctx.colors
        return f"""
* {{ box-sizing: border-box; }}
body {{
    font-family: '{css_font_family(ctx.options.font_family)}', sans-serif;
    font-size: {ctx.options.font_size}pt;
    color: {c.body_text_color};
    background-color: {c.background_color};
}}
h1, h2, h3, h4, h5, h6 {{ color: {c.title_color}; font-weight: 600; }}
a {{ color: {c.accent_color}; }}
.doc-header {{
    text-align: center;
    margin-bottom: 2em;
    padding-bottom: 1.5em;
    border-bottom: 2px solid {c.border_color};
}}
.doc-header .title {{ font-size: 2.4em; font-weight: 700; color: {c.title_color}; }}
.doc-header .author {{ font-size: 1.2em; color: {c.author_color}; opacity: 0.85; }}
.doc-header .description {{ margin-top: 0.5em; opacity: 0.75; }}
.doc-footer {{
    margin-top: 3em;
    padding-top: 1.5em;
    border-top: 1px solid {c.border_color};
    text-align: center;
    font-size: 0.9em;
    opacity: 0.7;
}}
.table-of-contents {{
    margin: 1.5em 0;
    padding: 1em 1.5em;
    background-color: {c.muted_background};
    border-left: 4px solid {c.border_color};
}}
.table-of-contents ul {{ list-style: none; padding-left: 0; }}
.toc-level-2 {{ padding-left: 1.5em; }}
.toc-level-3 {{ padding-left: 3em; }}
.toc-level-4, .toc-level-5, .toc-level-6 {{ padding-left: 4.5em; }}
blockquote {{
    border-left: 4px solid {c.border_color};
    margin: 1.5em 0;
    padding: 0.5em 1.5em;
    background-color: {c.muted_background};
}}
code {{ font-family: 'Courier New', monospace; font-size: 0.9em; }}
pre, .codehilite {{
    background-color: {c.muted_background};
    padding: 1em;
    border-radius: 6px;
    overflow-x: auto;
}}
table {{ border-collapse: collapse; width: 100%; margin: 1.5em 0; }}
th, td {{ border: 1px solid {c.border_color}; padding: 0.6em; text-align: left; }}
th {{ background-color: {c.table_header_color}; color: {c.background_color}; }}
img {{ max-width: 100%; height: auto; }}
"""

    # -------------------- helpers --------------------

    def _probe(self) -> ThemeProbe:
        if self.color_target == "print" or self._theme_context is None:
            return ThemeProbe()
        return self._theme_context.probe()
