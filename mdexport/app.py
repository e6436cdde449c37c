from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path

from PyQt6.QtWidgets import QApplication

from mdexport import __version__
from mdexport.di.container import Container
from mdexport.domain.models import ExportFormat, ExportState
from mdexport.services.config.app_config import build_export_config
from mdexport.services.markdown_converter import extract_headings
from mdexport.utils.constants import APP_NAME, APP_ORG, FALLBACK_FILENAME, THEMES
from mdexport.utils.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="mdexport",
        description="Export a Markdown file as a print document, Word file, e-book or slide deck.",
    )
    p.add_argument("input", type=Path, help="Markdown file to export")
    p.add_argument("-f", "--format", choices=[f.value for f in ExportFormat], help="export format")
    p.add_argument("--title", help="document title (default: first heading or file name)")
    p.add_argument("--author", help="document author")
    p.add_argument("--description", help="short description shown under the title")
    p.add_argument("--theme", choices=sorted(THEMES), help="color theme")
    p.add_argument("--page-size", choices=["A4", "Letter", "Legal"])
    p.add_argument("--orientation", choices=["portrait", "landscape"])
    p.add_argument("--font-size", type=int)
    p.add_argument("--font-family")
    p.add_argument("--watermark", help="watermark text")
    p.add_argument("--css", type=Path, help="file with extra CSS appended to the document styles")
    p.add_argument("--no-toc", action="store_true", help="omit the table of contents")
    p.add_argument("--no-page-numbers", action="store_true")
    p.add_argument("--no-header-footer", action="store_true")
    p.add_argument("-o", "--out", type=Path, help="output folder")
    p.add_argument("-c", "--config", type=Path, help="INI file with export defaults")
    p.add_argument("-v", "--verbose", action="count", default=0, help="-v info, -vv debug")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def _default_title(markdown_text: str, source: Path) -> str:
    for h in extract_headings(markdown_text):
        if h.level == 1 and h.text:
            return h.text
    return source.stem


def _log_progress(state: ExportState) -> None:
    logger.info("Export progress: %d%%", state.progress)


def run_app(argv: Sequence[str]) -> int:
    """
    Parses the command line, composes services via the DI container and
    runs one export. Print exports keep a Qt event loop alive until the
    print window closes.
    """
    args = build_parser().parse_args(list(argv[1:]))

    config = build_export_config(explicit_ini=args.config)
    setup_logging(args.verbose, level=None if args.verbose else config.log_level())
    if config.loaded_from:
        logger.info("Config: %s", config.loaded_from)

    wants_print = (args.format or config.default_format().value) == ExportFormat.PRINT.value
    app: QApplication | None = None
    if wants_print:
        QApplication.setOrganizationName(APP_ORG)
        QApplication.setApplicationName(APP_NAME)
        app = QApplication(list(argv))

    container = Container.default(config=config, gui=app is not None)

    try:
        markdown_text = container.file_service.read_text(args.input)
    except OSError as e:
        logger.error("Cannot read %s: %s", args.input, e)
        return 1

    custom_css = None
    if args.css is not None:
        try:
            custom_css = container.file_service.read_text(args.css)
        except OSError as e:
            logger.error("Cannot read %s: %s", args.css, e)
            return 1

    options = config.default_options(
        format=ExportFormat(args.format) if args.format else None,
        title=args.title or _default_title(markdown_text, args.input),
        author=args.author,
        description=args.description,
        theme_name=args.theme,
        page_size=args.page_size,
        orientation=args.orientation,
        font_size=args.font_size,
        font_family=args.font_family,
        watermark_text=args.watermark,
        custom_css=custom_css,
        include_toc=False if args.no_toc else None,
        include_page_numbers=False if args.no_page_numbers else None,
        header_footer=False if args.no_header_footer else None,
    )

    output_dir = container.resolve_output_dir(args.out)
    orchestrator = container.build_orchestrator(output_dir=output_dir)
    orchestrator.add_progress_listener(_log_progress)

    outcome = orchestrator.export(
        markdown_text, options, fallback_filename=args.input.stem or FALLBACK_FILENAME
    )
    if not outcome.success:
        return 1

    container.settings_service.set_last_format(options.format.value)
    if outcome.document is not None and not wants_print:
        container.settings_service.set_output_dir(str(output_dir))
        print(output_dir / outcome.document.filename)

    if app is not None:
        return app.exec()
    return 0
