from __future__ import annotations

import logging

from bs4 import BeautifulSoup, Tag

from mdexport.domain.models import ExportFormat, GenerationContext
from mdexport.services.emoji_encoder import preserve_emoji
from mdexport.services.generators.base import BaseFormatGenerator
from mdexport.utils.constants import PAGE_SIZES_PT, SUCCESS_MESSAGES
from mdexport.utils.html_utils import css_font_family

logger = logging.getLogger(__name__)

OFFICE_NAMESPACES = (
    ' xmlns:o="urn:schemas-microsoft-com:office:office"'
    ' xmlns:w="urn:schemas-microsoft-com:office:word"'
    ' xmlns="http://www.w3.org/TR/REC-html40"'
)

DISALLOWED_TAGS = ("script", "style", "iframe", "object", "embed", "link", "meta")
_TABLE_ATTRS = {
    "border": "1",
    "cellpadding": "8",
    "cellspacing": "0",
    "style": "border-collapse: collapse; width: 100%; mso-table-layout-alt: fixed;",
}
_CELL_STYLE = "border: 1px solid #000000; padding: 8px; vertical-align: top; mso-border-alt: solid #000000 .5pt;"


def _drop_attribute(name: str) -> bool:
    n = name.lower()
    return n == "style" or n.startswith("on") or n.startswith("data-")


def sanitize_for_word(html: str) -> str:
    """
    Remove markup Word either ignores or renders badly.

    Drops active and embedded content, strips inline styles, event handlers
    and data attributes, then gives tables explicit borders because Word
    does not inherit them from CSS.
    """
    soup = BeautifulSoup(html or "", "html.parser")

    removed = soup.find_all(DISALLOWED_TAGS)
    for element in removed:
        element.decompose()
    if removed:
        logger.debug("Dropped %d disallowed elements for Word", len(removed))

    for element in soup.find_all(True):
        if not isinstance(element, Tag) or not element.attrs:
            continue
        for attr in [a for a in element.attrs if _drop_attribute(a)]:
            del element[attr]

    for table in soup.find_all("table"):
        table.attrs.update(_TABLE_ATTRS)
    for cell in soup.find_all(["th", "td"]):
        cell["style"] = _CELL_STYLE

    return str(soup)


class WordGenerator(BaseFormatGenerator):
    """Office-namespaced HTML that Word opens as a regular document."""

    format = ExportFormat.WORD
    label = "Word document"
    extension = ".doc"
    mime_type = "application/msword"
    success_message = SUCCESS_MESSAGES["word"]
    color_target = "print"
    protect_watermark = False
    html_attrs = OFFICE_NAMESPACES

    def build_head_extras(self, ctx: GenerationContext) -> str:
        return (
            super().build_head_extras(ctx)
            + "\n<!--[if gte mso 9]><xml><w:WordDocument><w:View>Print</w:View>"
            "<w:Zoom>100</w:Zoom><w:DoNotOptimizeForBrowser/></w:WordDocument></xml><![endif]-->"
        )

    def build_styles(self, ctx: GenerationContext) -> str:
        opts = ctx.options
        width, height = PAGE_SIZES_PT.get(opts.page_size, PAGE_SIZES_PT["A4"])
        if opts.orientation == "landscape":
            width, height = height, width
        footer_ref = "\n    mso-footer: f1;" if opts.include_page_numbers else ""
        c = ctx.colors
        return f"""
@page Section1 {{
    size: {width}pt {height}pt;
    mso-page-orientation: {opts.orientation};
    margin: 72pt 72pt 72pt 72pt;
    mso-header-margin: 36pt;
    mso-footer-margin: 36pt;{footer_ref}
}}
div.Section1 {{ page: Section1; }}
body {{
    font-family: '{css_font_family(opts.font_family)}', 'Times New Roman', serif;
    font-size: {opts.font_size}pt;
    line-height: 1.5;
    color: {c.body_text_color};
    background-color: {c.background_color};
}}
h1, h2, h3, h4, h5, h6 {{ color: {c.body_text_color}; font-weight: bold; margin: 1.2em 0 0.4em 0; }}
h1 {{ font-size: 2em; }}
h2 {{ font-size: 1.5em; }}
h3 {{ font-size: 1.3em; }}
p {{ margin: 0.8em 0; }}
a {{ color: {c.accent_color}; }}
code, pre {{ font-family: 'Courier New', monospace; background-color: #f5f5f5; }}
pre {{ padding: 10px; mso-pagination: widow-orphan; }}
blockquote {{ border-left: 4px solid #cccccc; margin: 1em 0; padding: 0.5em 1em; font-style: italic; }}
table {{
    border-collapse: collapse;
    width: 100%;
    border: 1px solid #000000;
    mso-table-layout-alt: fixed;
    mso-table-lspace: 9.0pt;
    mso-table-rspace: 9.0pt;
}}
th, td {{ border: 1px solid #000000; padding: 8px 12px; mso-border-alt: solid #000000 .5pt; }}
th {{ background-color: #f0f0f0; font-weight: bold; mso-shading: #f0f0f0; }}
.doc-header {{ text-align: center; border-bottom: 2px solid {c.border_color}; margin-bottom: 24pt; }}
.doc-header .title {{ font-size: 24pt; font-weight: bold; color: {c.title_color}; }}
.doc-header .author {{ font-size: 13pt; color: {c.author_color}; }}
.doc-footer {{ margin-top: 24pt; border-top: 1px solid {c.border_color}; text-align: center; font-size: 9pt; }}
.table-of-contents ul {{ list-style: none; }}
p.MsoFooter {{ text-align: center; font-size: 9pt; }}
"""

    def build_header(self, ctx: GenerationContext) -> str:
        return preserve_emoji(super().build_header(ctx))

    def build_body(self, ctx: GenerationContext) -> str:
        content = sanitize_for_word(ctx.conversion.html)
        toc = self.build_toc(ctx)
        parts = [p for p in (toc, content) if p]
        return preserve_emoji('<div class="Section1">\n' + "\n".join(parts) + "\n</div>")

    def build_footer(self, ctx: GenerationContext) -> str:
        parts = [preserve_emoji(super().build_footer(ctx))]
        if ctx.options.include_page_numbers:
            parts.append(
                '<div style="mso-element: footer" id="f1">'
                '<p class="MsoFooter">Page <span style="mso-field-code: \' PAGE \'"></span></p>'
                "</div>"
            )
        return "\n".join(p for p in parts if p)
