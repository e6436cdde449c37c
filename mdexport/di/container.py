from __future__ import annotations

from pathlib import Path

from PyQt6.QtCore import QSettings

from mdexport.domain.interfaces import (
    IDownloadTarget,
    IFileService,
    IGeneratorRegistry,
    IMarkdownConverter,
    INotifier,
    IPrintHost,
    ISettingsService,
    IThemeContext,
)
from mdexport.services.config.app_config import ExportConfig, build_export_config
from mdexport.services.export_orchestrator import ExportOrchestrator
from mdexport.services.file_service import FileService
from mdexport.services.generators import (
    EbookGenerator,
    GeneratorRegistryInst,
    PrintGenerator,
    SlidesGenerator,
    WordGenerator,
)
from mdexport.services.hosts import (
    FileDownloadTarget,
    LogNotifier,
    QtMessageService,
    QtPrintHost,
    QtThemeContext,
)
from mdexport.services.markdown_converter import MarkdownConverter
from mdexport.services.settings_service import SettingsService
from mdexport.utils.constants import APP_NAME, APP_ORG


class Container:
    """
    Lightweight DI container:
      - Wires default services if not provided
      - Registers the built-in generators (print, word, ebook, slides) in its own registry
      - Builds orchestrators bound to an output folder
    """

    def __init__(
        self,
        converter: IMarkdownConverter | None = None,
        files: IFileService | None = None,
        settings: ISettingsService | None = None,
        qsettings: QSettings | None = None,
        config: ExportConfig | None = None,
        theme_context: IThemeContext | None = None,
        notifier: INotifier | None = None,
        print_host: IPrintHost | None = None,
    ) -> None:
        self.converter: IMarkdownConverter = converter or MarkdownConverter()
        self.file_service: IFileService = files or FileService()
        self.settings_service: ISettingsService = settings or SettingsService(qsettings or QSettings())
        self.config: ExportConfig = config or build_export_config()
        self.theme_context: IThemeContext = theme_context or QtThemeContext(self.settings_service)
        self.notifier: INotifier = notifier or LogNotifier()
        self.print_host: IPrintHost = print_host or QtPrintHost()

        self.registry: IGeneratorRegistry = GeneratorRegistryInst()
        self._ensure_builtin_generators()

    # ---------- Class helpers ----------

    @staticmethod
    def default(
        qsettings: QSettings | None = None,
        *,
        config: ExportConfig | None = None,
        gui: bool = False,
        organization: str = APP_ORG,
        application: str = APP_NAME,
    ) -> Container:
        """With gui=True outcomes are shown in message boxes (needs a QApplication)."""
        if qsettings is None:
            qsettings = QSettings(organization, application)
        notifier = QtMessageService() if gui else None
        return Container(qsettings=qsettings, config=config, notifier=notifier)

    # ---------- Internals ----------

    def _ensure_builtin_generators(self) -> None:
        for cls in (PrintGenerator, WordGenerator, EbookGenerator, SlidesGenerator):
            try:
                self.registry.get(cls.format)
            except KeyError:
                self.registry.register(cls(self.converter, self.theme_context))

    # ---------- factories ----------

    def resolve_output_dir(self, explicit: Path | None = None) -> Path:
        """CLI flag, then config, then the last used folder, then the working directory."""
        if explicit is not None:
            return explicit
        configured = self.config.output_dir()
        if configured is not None:
            return configured
        remembered = self.settings_service.get_output_dir()
        return Path(remembered) if remembered else Path.cwd()

    def build_download_target(self, output_dir: Path) -> IDownloadTarget:
        return FileDownloadTarget(output_dir, self.file_service)

    def build_orchestrator(self, *, output_dir: Path | None = None) -> ExportOrchestrator:
        return ExportOrchestrator(
            self.registry,
            notifier=self.notifier,
            download_target=self.build_download_target(self.resolve_output_dir(output_dir)),
            print_host=self.print_host,
            settle_ms=self.config.print_settle_ms(),
        )
