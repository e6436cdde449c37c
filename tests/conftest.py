from __future__ import annotations

import logging
import os
from datetime import date, datetime, timezone
from pathlib import Path

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtCore import QSettings  # noqa: E402
from PyQt6.QtWidgets import QApplication  # noqa: E402

from mdexport.domain.models import ExportFormat, ExportOptions, GeneratedDocument, ThemeProbe  # noqa: E402
from mdexport.services.file_service import FileService  # noqa: E402
from mdexport.services.markdown_converter import MarkdownConverter  # noqa: E402
from mdexport.services.settings_service import SettingsService  # noqa: E402
from mdexport.utils.logging_setup import LOGGER_NAME  # noqa: E402

FIXED_DAY = date(2024, 3, 15)
FIXED_NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)

SAMPLE_MARKDOWN = """# Quarterly Report

Intro paragraph with **bold** text.

## Revenue

- North
- South

## Outlook

Things look *good*.
"""


# --- Fallback QApplication fixture (works with or without pytest-qt) ---
@pytest.fixture(scope="session")
def qapp():
    """Provide a QApplication for tests that need Qt.
    Creates one if not present; reuses existing otherwise.
    """
    app = QApplication.instance()
    created = False
    if app is None:
        app = QApplication([])
        created = True
    try:
        yield app
    finally:
        if created:
            app.quit()


@pytest.fixture(autouse=True)
def _reset_package_logger():
    # setup_logging() sets propagate=False on the package logger; caplog needs it reset
    yield
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


# --- Other common fixtures ---


@pytest.fixture()
def tmp_settings_path(tmp_path: Path) -> Path:
    return tmp_path / "settings.ini"


@pytest.fixture()
def qsettings(tmp_settings_path: Path) -> QSettings:
    # Use an INI file so we don't touch system registry / platform stores
    s = QSettings(str(tmp_settings_path), QSettings.Format.IniFormat)
    s.clear()
    return s


@pytest.fixture()
def settings_service(qsettings: QSettings) -> SettingsService:
    return SettingsService(qsettings)


@pytest.fixture()
def file_service() -> FileService:
    return FileService()


@pytest.fixture()
def converter() -> MarkdownConverter:
    return MarkdownConverter()


@pytest.fixture()
def options() -> ExportOptions:
    return ExportOptions(
        format=ExportFormat.EBOOK,
        title="Quarterly Report",
        author="Dana Writer",
        include_toc=True,
    )


@pytest.fixture()
def sample_markdown() -> str:
    return SAMPLE_MARKDOWN


# --- Fakes for host adapters ---


class FakeNotifier:
    def __init__(self) -> None:
        self.successes: list[tuple[str, str]] = []
        self.failures: list[tuple[str, str]] = []

    def success(self, title: str, text: str) -> None:
        self.successes.append((title, text))

    def failure(self, title: str, text: str) -> None:
        self.failures.append((title, text))


class FakeWindow:
    """Loads synchronously: write() fires the on_load callbacks immediately."""

    def __init__(self) -> None:
        self.callbacks = []
        self.written: str | None = None
        self.printed = 0
        self.closed = False

    def on_load(self, callback) -> None:
        self.callbacks.append(callback)

    def write(self, html: str) -> None:
        self.written = html
        for cb in self.callbacks:
            cb()

    def print(self) -> None:
        self.printed += 1

    def close(self) -> None:
        self.closed = True


class FakePrintHost:
    def __init__(self, *, blocked: bool = False) -> None:
        self.blocked = blocked
        self.windows: list[FakeWindow] = []
        self.delays: list[int] = []

    def open_window(self):
        if self.blocked:
            return None
        w = FakeWindow()
        self.windows.append(w)
        return w

    def schedule(self, delay_ms: int, callback) -> None:
        self.delays.append(delay_ms)
        callback()


class FakeDownloadTarget:
    def __init__(self) -> None:
        self.delivered: list[GeneratedDocument] = []

    def deliver(self, document: GeneratedDocument):
        self.delivered.append(document)
        return Path("/virtual") / document.filename


class FakeThemeContext:
    def __init__(self, probe: ThemeProbe | None = None) -> None:
        self._probe = probe or ThemeProbe()
        self.calls = 0

    def probe(self) -> ThemeProbe:
        self.calls += 1
        return self._probe


@pytest.fixture()
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture()
def print_host() -> FakePrintHost:
    return FakePrintHost()


@pytest.fixture()
def download_target() -> FakeDownloadTarget:
    return FakeDownloadTarget()


class FakeIni:
    """
    Minimal IniConfigService-like fake backed by a dict of sections.
    We only implement what ExportConfig calls.
    """

    def __init__(self, data: dict[str, dict[str, str]] | None = None, *, loaded_from: Path | None = None) -> None:
        self._data = data or {}
        self._loaded_from = loaded_from

    def get(self, section: str, key: str, default: str | None = None) -> str | None:
        return self._data.get(section, {}).get(key, default)

    def get_int(self, section: str, key: str, default: int | None = None) -> int | None:
        raw = self.get(section, key)
        try:
            return int(raw) if raw is not None else default
        except ValueError:
            return default

    def get_bool(self, section: str, key: str, default: bool | None = None) -> bool | None:
        raw = self.get(section, key)
        if raw is None:
            return default
        return raw.lower() in {"1", "true", "yes", "on"}

    def as_dict(self) -> dict[str, dict[str, str]]:
        return self._data

    @property
    def loaded_from(self) -> Path | None:
        return self._loaded_from
