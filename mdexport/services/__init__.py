"""Concrete service implementations and export strategies."""

from .export_orchestrator import ExportOrchestrator
from .file_service import FileService
from .markdown_converter import MarkdownConverter
from .settings_service import SettingsService

__all__ = ["ExportOrchestrator", "FileService", "MarkdownConverter", "SettingsService"]
