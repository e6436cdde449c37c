from __future__ import annotations

from mdexport.domain.models import ExportFormat, GenerationContext
from mdexport.services.generators.base import BaseFormatGenerator
from mdexport.utils.constants import SUCCESS_MESSAGES


class EbookGenerator(BaseFormatGenerator):
    format = ExportFormat.EBOOK
    label = "E-book (HTML)"
    extension = ".html"
    mime_type = "text/html"
    success_message = SUCCESS_MESSAGES["ebook"]

    def build_styles(self, ctx: GenerationContext) -> str:
        c = ctx.colors
        shadow = "rgba(0, 0, 0, 0.45)" if c.is_dark else "rgba(0, 0, 0, 0.12)"
        return (
            self.base_styles(ctx)
            + f"""
body {{
    font-family: Georgia, 'Times New Roman', serif;
    line-height: 1.8;
    max-width: 42em;
    margin: 0 auto;
    padding: 3em 1.5em;
}}
h1 {{ font-size: 2.2em; margin: 1.6em 0 0.6em; }}
h2 {{ font-size: 1.7em; margin: 1.4em 0 0.5em; }}
h3 {{ font-size: 1.35em; }}
p {{ margin: 1em 0; text-align: justify; hyphens: auto; }}
p:first-of-type::first-letter {{ font-size: 1.3em; }}
img {{
    display: block;
    margin: 1.8em auto;
    border-radius: 6px;
    box-shadow: 0 6px 18px {shadow};
}}
table {{ box-shadow: 0 4px 14px {shadow}; }}
tr:nth-child(even) {{ background-color: {c.muted_background}; }}
.reading-time {{ text-align: center; font-style: italic; opacity: 0.7; margin-bottom: 2em; }}
@media print {{
    body {{ max-width: none; padding: 0; }}
    img, table {{ box-shadow: none; page-break-inside: avoid; }}
}}
"""
        )

    def build_body(self, ctx: GenerationContext) -> str:
        body = super().build_body(ctx)
        meta = ctx.conversion.metadata
        if meta is None or not meta.reading_time:
            return body
        unit = "minute" if meta.reading_time == 1 else "minutes"
        note = f'<p class="reading-time">{meta.word_count} words &middot; about {meta.reading_time} {unit} read</p>'
        return f"{note}\n{body}"
