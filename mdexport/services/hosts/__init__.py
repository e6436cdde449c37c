"""Adapters between the export pipeline and its host (Qt, filesystem, logging)."""

from .download_target import FileDownloadTarget
from .notifier import LogNotifier, QtMessageService
from .qt_print_host import QtPrintHost, QtPrintWindow
from .qt_theme_context import QtThemeContext

__all__ = [
    "FileDownloadTarget",
    "LogNotifier",
    "QtMessageService",
    "QtPrintHost",
    "QtPrintWindow",
    "QtThemeContext",
]
