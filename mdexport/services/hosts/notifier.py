from __future__ import annotations

import logging
from typing import Any

from PyQt6.QtWidgets import QMessageBox

from mdexport.domain.interfaces import INotifier

logger = logging.getLogger(__name__)


class LogNotifier(INotifier):
    """Reports outcomes through logging (command line use)."""

    def success(self, title: str, text: str) -> None:
        logger.info("%s: %s", title, text)

    def failure(self, title: str, text: str) -> None:
        logger.error("%s: %s", title, text)


class QtMessageService(INotifier):
    """Qt-backed implementation for message dialogs. Messages are logged as well."""

    def __init__(self, parent: Any | None = None) -> None:
        self._parent = parent

    def success(self, title: str, text: str) -> None:
        logger.info("%s: %s", title, text)
        QMessageBox.information(self._parent, title, text)

    def failure(self, title: str, text: str) -> None:
        logger.error("%s: %s", title, text)
        QMessageBox.critical(self._parent, title, text)
