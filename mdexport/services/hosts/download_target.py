from __future__ import annotations

import logging
from pathlib import Path

from mdexport.domain.interfaces import IDownloadTarget, IFileService
from mdexport.domain.models import GeneratedDocument

logger = logging.getLogger(__name__)


class FileDownloadTarget(IDownloadTarget):
    """Saves finished artifacts into a folder, replacing files with the same name."""

    def __init__(self, output_dir: Path, file_service: IFileService) -> None:
        self._output_dir = output_dir
        self._files = file_service

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    def deliver(self, document: GeneratedDocument) -> Path:
        path = self._output_dir / document.filename
        self._files.write_text_atomic(path, document.markup)
        logger.debug("Wrote %s (%s, %d chars)", path, document.mime_type, len(document.markup))
        return path
