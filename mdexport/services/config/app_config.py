from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from mdexport.domain.interfaces import IConfigService
from mdexport.domain.models import ExportFormat, ExportOptions
from mdexport.services.config.ini_config_service import IniConfigService
from mdexport.utils.constants import (
    FONT_SIZE_DEFAULT,
    ORIENTATIONS,
    PAGE_SIZES,
    PRINT_SETTLE_MS,
)
from mdexport.utils.logging_setup import LOG_LEVELS

logger = logging.getLogger(__name__)

SECTION_EXPORT = "export"
SECTION_LOGGING = "logging"


def _project_root_fallback() -> Path:
    """
    Best-effort project root resolution that also works in PyInstaller:
      - PyInstaller onefile/onedir uses sys._MEIPASS as bundle root
      - dev mode uses this file location to walk upward
    """
    meipass = getattr(sys, "_MEIPASS", None)  # type: ignore[attr-defined]
    if meipass:
        return Path(meipass)

    # app_config.py -> mdexport/services/config/app_config.py
    return Path(__file__).resolve().parents[3]


@dataclass(frozen=True)
class ExportConfig(IConfigService):
    """
    Adapter over IniConfigService that turns the [export] and [logging]
    sections into typed defaults. Unknown enum values in the file are
    ignored with a warning so a typo never blocks an export.
    """

    ini: IConfigService

    # ---- typed accessors ----

    def default_format(self) -> ExportFormat:
        raw = (self.ini.get(SECTION_EXPORT, "format") or "").strip().lower()
        try:
            return ExportFormat(raw) if raw else ExportFormat.PRINT
        except ValueError:
            logger.warning("Unknown export format %r in config; using print", raw)
            return ExportFormat.PRINT

    def _choice(self, key: str, allowed, default: str) -> str:
        raw = (self.ini.get(SECTION_EXPORT, key) or "").strip()
        if not raw:
            return default
        if raw not in allowed:
            logger.warning("Unknown %s %r in config; using %s", key, raw, default)
            return default
        return raw

    def default_options(self, **overrides) -> ExportOptions:
        """ExportOptions from config; keyword overrides win (e.g. CLI flags)."""
        get = self.ini.get
        get_bool = self.ini.get_bool
        opts = ExportOptions(
            format=self.default_format(),
            author=(get(SECTION_EXPORT, "author") or "").strip(),
            page_size=self._choice("page_size", PAGE_SIZES, "A4"),  # type: ignore[arg-type]
            orientation=self._choice("orientation", ORIENTATIONS, "portrait"),  # type: ignore[arg-type]
            font_size=self.ini.get_int(SECTION_EXPORT, "font_size", FONT_SIZE_DEFAULT) or FONT_SIZE_DEFAULT,
            font_family=(get(SECTION_EXPORT, "font_family") or "").strip() or "Arial",
            theme_name=(get(SECTION_EXPORT, "theme") or "").strip() or "default",
            include_toc=bool(get_bool(SECTION_EXPORT, "include_toc", True)),
            include_page_numbers=bool(get_bool(SECTION_EXPORT, "include_page_numbers", True)),
            header_footer=bool(get_bool(SECTION_EXPORT, "header_footer", True)),
            watermark_text=(get(SECTION_EXPORT, "watermark") or "").strip(),
        )
        changes = {k: v for k, v in overrides.items() if v is not None}
        return opts.replace(**changes) if changes else opts

    def output_dir(self) -> Path | None:
        raw = (self.ini.get(SECTION_EXPORT, "output_dir") or "").strip()
        return Path(raw).expanduser() if raw else None

    def print_settle_ms(self) -> int:
        value = self.ini.get_int(SECTION_EXPORT, "print_settle_ms", PRINT_SETTLE_MS)
        return value if value is not None and value >= 0 else PRINT_SETTLE_MS

    def log_level(self) -> str | None:
        raw = (self.ini.get(SECTION_LOGGING, "level") or "").strip()
        if not raw:
            return None
        if raw.upper() not in LOG_LEVELS:
            logger.warning("Unknown log level %r in config; using verbosity flags", raw)
            return None
        return raw.upper()

    # ---- delegate IConfigService methods (full surface) ----

    def get(self, section: str, key: str, default: str | None = None) -> str | None:
        return self.ini.get(section, key, default)

    def get_int(self, section: str, key: str, default: int | None = None) -> int | None:
        return self.ini.get_int(section, key, default)

    def get_bool(self, section: str, key: str, default: bool | None = None) -> bool | None:
        return self.ini.get_bool(section, key, default)

    def as_dict(self) -> Mapping[str, Mapping[str, str]]:
        return self.ini.as_dict()

    @property
    def loaded_from(self) -> Path | None:
        return getattr(self.ini, "loaded_from", None)


def build_export_config(
    *, explicit_ini: Path | None = None, project_root: Path | None = None
) -> ExportConfig:
    root = project_root or _project_root_fallback()
    return ExportConfig(ini=IniConfigService(explicit_path=explicit_ini, project_root=root))
