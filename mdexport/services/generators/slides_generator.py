from __future__ import annotations

from dataclasses import replace

from mdexport.domain.models import ExportFormat, ExportOptions, GenerationContext, SlideRecord
from mdexport.services.generators.base import BaseFormatGenerator
from mdexport.services.slide_segmenter import to_slides
from mdexport.utils.constants import SUCCESS_MESSAGES
from mdexport.utils.html_utils import css_font_family, escape_html

CLOSING_TITLE = "Thank you"
SWIPE_THRESHOLD_PX = 50

NAVIGATION_SCRIPT = """
(function () {
    var slides = document.querySelectorAll('.slide');
    var total = slides.length;
    var current = 0;
    var counter = document.getElementById('current-slide');
    var bar = document.querySelector('.progress-bar');

    function show(n) {
        slides[current].classList.remove('active');
        current = (n + total) % total;
        slides[current].classList.add('active');
        counter.textContent = current + 1;
        bar.style.width = ((current + 1) / total * 100) + '%';
    }
    function toggleFullscreen() {
        if (!document.fullscreenElement) {
            document.documentElement.requestFullscreen();
        } else {
            document.exitFullscreen();
        }
    }
    window.nextSlide = function () { show(current + 1); };
    window.previousSlide = function () { show(current - 1); };
    window.toggleFullscreen = toggleFullscreen;

    document.addEventListener('keydown', function (e) {
        switch (e.key) {
            case 'ArrowRight':
            case ' ':
            case 'PageDown':
                e.preventDefault(); show(current + 1); break;
            case 'ArrowLeft':
            case 'PageUp':
                e.preventDefault(); show(current - 1); break;
            case 'Home':
                e.preventDefault(); show(0); break;
            case 'End':
                e.preventDefault(); show(total - 1); break;
            case 'F11':
                e.preventDefault(); toggleFullscreen(); break;
        }
    });

    var startX = 0, startY = 0;
    document.addEventListener('touchstart', function (e) {
        startX = e.touches[0].clientX;
        startY = e.touches[0].clientY;
    });
    document.addEventListener('touchend', function (e) {
        var dx = startX - e.changedTouches[0].clientX;
        var dy = startY - e.changedTouches[0].clientY;
        if (Math.abs(dx) > Math.abs(dy) && Math.abs(dx) > __SWIPE_PX__) {
            show(dx > 0 ? current + 1 : current - 1);
        }
    });

    show(0);
})();
""".replace("__SWIPE_PX__", str(SWIPE_THRESHOLD_PX))


class SlidesGenerator(BaseFormatGenerator):
    """
    HTML slide deck. Title slide first, one slide per level-1/level-2
    section, closing slide last; navigation works offline.
    """

    format = ExportFormat.SLIDES
    label = "Presentation"
    extension = ".html"
    mime_type = "text/html"
    success_message = SUCCESS_MESSAGES["slides"]
    filename_suffix = "-presentation"

    def prepare(self, markdown_text: str, options: ExportOptions) -> GenerationContext:
        ctx = super().prepare(markdown_text, options)
        slides = to_slides(
            ctx.conversion,
            title=options.title,
            author=options.author,
            description=options.description,
        )
        return replace(ctx, slides=tuple(slides))

    def document_title(self, ctx: GenerationContext) -> str:
        return f"{escape_html(ctx.options.title)} - Presentation"

    def slide_count(self, ctx: GenerationContext) -> int:
        return len(ctx.slides) + 1  # closing slide

    def build_styles(self, ctx: GenerationContext) -> str:
        c = ctx.colors
        chrome = "rgba(255, 255, 255, 0.15)" if c.is_dark else "rgba(0, 0, 0, 0.08)"
        return f"""
* {{ margin: 0; padding: 0; box-sizing: border-box; }}
body {{
    font-family: '{css_font_family(ctx.options.font_family)}', sans-serif;
    background: linear-gradient(135deg, {c.background_color} 0%, {c.muted_background} 100%);
    color: {c.body_text_color};
    overflow: hidden;
}}
.presentation {{ display: flex; flex-direction: column; height: 100vh; position: relative; }}
.slide {{
    display: none;
    flex: 1;
    padding: 60px;
    flex-direction: column;
    justify-content: center;
    align-items: center;
    text-align: center;
}}
.slide.active {{ display: flex; }}
.slide h1 {{ font-size: 3.5em; margin-bottom: 0.4em; color: {c.title_color}; }}
.slide h2 {{ font-size: 2.6em; margin-bottom: 0.8em; color: {c.title_color}; }}
.slide-content {{ font-size: {max(ctx.options.font_size, 12) * 2}px; line-height: 1.6; max-width: 900px; text-align: left; }}
.slide-content p {{ margin: 0.8em 0; }}
.slide-content ul, .slide-content ol {{ margin: 1em 0; padding-left: 2em; }}
.slide-content li {{ margin: 0.4em 0; }}
.slide-content code {{ background: {chrome}; padding: 0.15em 0.4em; border-radius: 4px; }}
.slide-content pre {{ background: {chrome}; padding: 1em; border-radius: 8px; overflow-x: auto; }}
.slide-content blockquote {{ border-left: 4px solid {c.border_color}; padding-left: 1em; font-style: italic; }}
.slide-content table {{ border-collapse: collapse; margin: 1em auto; }}
.slide-content th, .slide-content td {{ border: 1px solid {c.border_color}; padding: 0.4em 0.8em; }}
.slide-content img {{ max-width: 100%; max-height: 60vh; }}
.title-slide .subtitle {{ font-size: 1.5em; opacity: 0.8; margin-bottom: 0.5em; }}
.title-slide .author, .closing-slide .author {{ font-size: 1.2em; color: {c.author_color}; opacity: 0.8; }}
.slide-counter {{
    position: fixed;
    top: 30px;
    right: 30px;
    background: {chrome};
    padding: 10px 20px;
    border-radius: 20px;
    z-index: 1000;
}}
.navigation {{
    position: fixed;
    bottom: 30px;
    left: 50%;
    transform: translateX(-50%);
    display: flex;
    gap: 15px;
    z-index: 1000;
}}
.nav-btn {{
    padding: 12px 24px;
    background: {chrome};
    border: 1px solid {c.border_color};
    border-radius: 25px;
    color: inherit;
    cursor: pointer;
    font-size: 1em;
}}
.progress-bar {{
    position: fixed;
    bottom: 0;
    left: 0;
    height: 4px;
    width: 0;
    background: {c.accent_color};
    transition: width 0.3s ease;
    z-index: 1000;
}}
@media (max-width: 768px) {{
    .slide {{ padding: 30px 20px; }}
    .slide h1 {{ font-size: 2.5em; }}
    .slide h2 {{ font-size: 2em; }}
}}
@media print {{
    body {{ overflow: visible; }}
    .slide {{ display: flex !important; page-break-after: always; height: 100vh; }}
    .navigation, .slide-counter, .progress-bar {{ display: none; }}
}}
"""

    def build_header(self, ctx: GenerationContext) -> str:
        return (
            '<div class="slide-counter">'
            f'<span id="current-slide">1</span> / <span id="total-slides">{self.slide_count(ctx)}</span>'
            "</div>\n"
            '<div class="progress-bar"></div>'
        )

    def build_body(self, ctx: GenerationContext) -> str:
        sections = [self._render_slide(s) for s in ctx.slides]
        sections.append(self._closing_slide(ctx))
        return '<div class="presentation">\n' + "\n".join(sections) + "\n</div>"

    def build_footer(self, ctx: GenerationContext) -> str:
        return (
            '<nav class="navigation">\n'
            '  <button class="nav-btn" onclick="previousSlide()">Previous</button>\n'
            '  <button class="nav-btn" onclick="toggleFullscreen()">Fullscreen</button>\n'
            '  <button class="nav-btn" onclick="nextSlide()">Next</button>\n'
            "</nav>\n"
            f"<script>{NAVIGATION_SCRIPT}</script>"
        )

    # -------------------- helpers --------------------

    def _render_slide(self, slide: SlideRecord) -> str:
        if slide.kind == "title":
            subtitle = f'\n  <div class="subtitle">{escape_html(slide.subtitle)}</div>' if slide.subtitle else ""
            author = f'\n  <div class="author">by {escape_html(slide.author)}</div>' if slide.author else ""
            return (
                f'<section class="slide title-slide active" data-slide="{slide.number}">\n'
                f"  <h1>{escape_html(slide.title)}</h1>{subtitle}{author}\n"
                "</section>"
            )
        content = "\n".join(slide.content)
        return (
            f'<section class="slide" data-slide="{slide.number}">\n'
            f"  <h2>{escape_html(slide.title)}</h2>\n"
            f'  <div class="slide-content">\n{content}\n  </div>\n'
            "</section>"
        )

    def _closing_slide(self, ctx: GenerationContext) -> str:
        opts = ctx.options
        return (
            f'<section class="slide closing-slide" data-slide="{self.slide_count(ctx)}">\n'
            f"  <h2>{CLOSING_TITLE}</h2>\n"
            f'  <div class="subtitle">{escape_html(opts.title)}</div>\n'
            f'  <div class="author">{escape_html(opts.author)}</div>\n'
            "</section>"
        )
