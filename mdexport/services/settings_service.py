from __future__ import annotations

from PyQt6.QtCore import QSettings

from mdexport.domain.interfaces import ISettingsService
from mdexport.utils.constants import (
    SETTINGS_LAST_FORMAT,
    SETTINGS_OUTPUT_DIR,
    SETTINGS_THEME_PREFERENCE,
)


class SettingsService(ISettingsService):
    """Persist small UI bits: stored light/dark preference, last format, last output folder."""

    def __init__(self, qsettings: QSettings) -> None:
        self._s = qsettings

    def _get_str(self, key: str) -> str | None:
        v = self._s.value(key)
        return str(v) if v not in (None, "") else None

    def get_theme_preference(self) -> str | None:
        return self._get_str(SETTINGS_THEME_PREFERENCE)

    def set_theme_preference(self, value: str | None) -> None:
        if value is None:
            self._s.remove(SETTINGS_THEME_PREFERENCE)
        else:
            self._s.setValue(SETTINGS_THEME_PREFERENCE, value)

    def get_last_format(self) -> str | None:
        return self._get_str(SETTINGS_LAST_FORMAT)

    def set_last_format(self, value: str) -> None:
        self._s.setValue(SETTINGS_LAST_FORMAT, value)

    def get_output_dir(self) -> str | None:
        return self._get_str(SETTINGS_OUTPUT_DIR)

    def set_output_dir(self, value: str) -> None:
        self._s.setValue(SETTINGS_OUTPUT_DIR, value)
