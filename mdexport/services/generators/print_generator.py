from __future__ import annotations

from mdexport.domain.models import ExportFormat, GenerationContext
from mdexport.services.generators.base import BaseFormatGenerator
from mdexport.utils.constants import SUCCESS_MESSAGES
from mdexport.utils.html_utils import page_size_css


class PrintGenerator(BaseFormatGenerator):
    """Print-ready HTML; the host turns it into paper or PDF through its print dialog."""

    format = ExportFormat.PRINT
    label = "Print / PDF"
    extension = ".html"
    mime_type = "text/html"
    success_message = SUCCESS_MESSAGES["print"]
    uses_styling_phase = True
    color_target = "print"

    def build_styles(self, ctx: GenerationContext) -> str:
        opts = ctx.options
        return (
            page_size_css(opts.page_size, opts.orientation, page_numbers=opts.include_page_numbers)
            + self.base_styles(ctx)
            + """
body {
    line-height: 1.6;
    margin: 0;
    padding: 0;
    -webkit-print-color-adjust: exact;
    print-color-adjust: exact;
}
h1 { font-size: 2em; border-bottom: 2px solid currentColor; padding-bottom: 0.2em; }
h2 { font-size: 1.6em; }
p { margin: 0.8em 0; text-align: justify; }
@media print {
    a { color: inherit; text-decoration: none; }
    h1, h2, h3, h4, h5, h6 { page-break-after: avoid; }
    img, table, pre, blockquote { page-break-inside: avoid; }
    .table-of-contents { page-break-after: always; }
    .no-print { display: none; }
}
"""
        )
