# mdexport/services/hosts/qt_print_host.py
from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from PyQt6.QtCore import QTimer
from PyQt6.QtPrintSupport import QPrintDialog, QPrinter
from PyQt6.QtWidgets import QApplication, QDialog

from mdexport.domain.interfaces import IPrintHost, IPrintWindow

logger = logging.getLogger(__name__)


class QtPrintWindow(IPrintWindow):
    """
    A QWebEngineView shown as a temporary top-level window.

    print() opens the native print dialog (choose "Save as PDF" there);
    close() waits for an in-flight print job before closing the view.
    """

    def __init__(self, view: Any, *, title: str = "Print preview") -> None:
        self._view = view
        self._callbacks: list[Callable[[], None]] = []
        self._printer: QPrinter | None = None
        self._printing = False
        self._close_requested = False
        self._view.setWindowTitle(title)
        # IMPORTANT: connect signals before calling setHtml
        self._view.loadFinished.connect(self._on_load_finished)
        self._view.printFinished.connect(self._on_print_finished)

    def on_load(self, callback: Callable[[], None]) -> None:
        self._callbacks.append(callback)

    def write(self, html: str) -> None:
        self._view.setHtml(html)
        self._view.show()

    def print(self) -> None:
        printer = QPrinter(QPrinter.PrinterMode.HighResolution)
        dialog = QPrintDialog(printer, self._view)
        if dialog.exec() != QDialog.DialogCode.Accepted:
            logger.info("Print dialog cancelled")
            return
        self._printer = printer  # must outlive the asynchronous print job
        self._printing = True
        self._view.print(printer)

    def close(self) -> None:
        if self._printing:
            self._close_requested = True
            return
        self._view.close()

    # -------------------- signals --------------------

    def _on_load_finished(self, ok: bool) -> None:
        if not ok:
            logger.error("Print document failed to load; closing window")
            self.close()
            return
        callbacks, self._callbacks = self._callbacks, []
        for cb in callbacks:
            cb()

    def _on_print_finished(self, success: bool) -> None:
        self._printing = False
        self._printer = None
        if not success:
            logger.error("Printing failed")
        if self._close_requested:
            self._view.close()


class QtPrintHost(IPrintHost):
    """Opens print windows backed by Qt WebEngine and schedules one-shot timers."""

    def __init__(self, view_factory: Callable[[], Any] | None = None) -> None:
        self._view_factory = view_factory
        self._windows: list[QtPrintWindow] = []

    def open_window(self) -> IPrintWindow | None:
        if QApplication.instance() is None:
            logger.warning("No QApplication running; cannot open a print window")
            return None
        factory = self._view_factory or self._default_view_factory()
        if factory is None:
            return None
        window = QtPrintWindow(factory())
        self._windows.append(window)  # keep a reference while the window lives
        return window

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> None:
        QTimer.singleShot(delay_ms, callback)

    @staticmethod
    def _default_view_factory() -> Callable[[], Any] | None:
        try:
            from PyQt6.QtWebEngineWidgets import QWebEngineView  # type: ignore
        except ImportError:
            logger.warning("Qt WebEngine is not available. Install PyQt6-WebEngine to enable print export.")
            return None
        return QWebEngineView
