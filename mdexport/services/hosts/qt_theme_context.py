from __future__ import annotations

import logging
from collections.abc import Iterable

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QGuiApplication

from mdexport.domain.interfaces import ISettingsService, IThemeContext
from mdexport.domain.models import HostTheme, ThemeProbe

logger = logging.getLogger(__name__)


def system_prefers_dark() -> bool | None:
    """OS color scheme via Qt style hints; None when unknown or no GUI app."""
    app = QGuiApplication.instance()
    if app is None:
        return None
    scheme = QGuiApplication.styleHints().colorScheme()
    if scheme == Qt.ColorScheme.Dark:
        return True
    if scheme == Qt.ColorScheme.Light:
        return False
    return None


class QtThemeContext(IThemeContext):
    """
    Gathers host signals for the theme resolver: the host's theme descriptor
    and markers, the OS color scheme and the stored preference.
    """

    def __init__(
        self,
        settings: ISettingsService | None = None,
        *,
        host_theme: HostTheme | None = None,
        data_theme: str | None = None,
        body_classes: Iterable[str] = (),
    ) -> None:
        self._settings = settings
        self._host_theme = host_theme
        self._data_theme = data_theme
        self._body_classes = frozenset(body_classes)

    def probe(self) -> ThemeProbe:
        probe = ThemeProbe(
            host_theme=self._host_theme,
            data_theme=self._data_theme,
            body_classes=self._body_classes,
            prefers_dark=system_prefers_dark(),
            stored_preference=self._settings.get_theme_preference() if self._settings else None,
        )
        logger.debug("Theme probe: %s", probe)
        return probe
