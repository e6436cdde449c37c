from __future__ import annotations

import logging

from mdexport.domain.errors import (
    EmptyContentError,
    ExportError,
    GenerationError,
    PopupBlockedError,
    ValidationError,
)
from mdexport.domain.interfaces import (
    IDownloadTarget,
    IFormatGenerator,
    IGeneratorRegistry,
    INotifier,
    IPrintHost,
    ProgressListener,
)
from mdexport.domain.models import (
    ExportOptions,
    ExportOutcome,
    ExportPhase,
    ExportState,
    GeneratedDocument,
)
from mdexport.services.options_validator import ensure_valid
from mdexport.utils.constants import (
    FAILURE_TITLE,
    FALLBACK_FILENAME,
    PRINT_SETTLE_MS,
    SUCCESS_TITLE,
    VALIDATION_TITLE,
)

logger = logging.getLogger(__name__)


class ExportOrchestrator:
    """
    Runs one export end to end and reports progress.

    Every failure is turned into an unsuccessful ExportOutcome plus a
    notification; the state always ends at (not exporting, 0). Nothing is
    retried and no artifact is delivered when a step fails.
    """

    def __init__(
        self,
        registry: IGeneratorRegistry,
        *,
        notifier: INotifier | None = None,
        download_target: IDownloadTarget | None = None,
        print_host: IPrintHost | None = None,
        settle_ms: int = PRINT_SETTLE_MS,
    ) -> None:
        self._registry = registry
        self._notifier = notifier
        self._download_target = download_target
        self._print_host = print_host
        self._settle_ms = settle_ms
        self._listeners: list[ProgressListener] = []
        self.state = ExportState()

    # -------------------- progress --------------------

    def add_progress_listener(self, listener: ProgressListener) -> None:
        self._listeners.append(listener)

    def remove_progress_listener(self, listener: ProgressListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _publish(self) -> None:
        for listener in list(self._listeners):
            listener(self.state)

    def _advance(self, phase: ExportPhase) -> None:
        self.state.advance(phase)
        logger.debug("Export phase %s (%d%%)", phase.name, phase.value)
        self._publish()

    # -------------------- export --------------------

    def export(
        self,
        markdown_text: str,
        options: ExportOptions,
        *,
        fallback_filename: str = FALLBACK_FILENAME,
    ) -> ExportOutcome:
        self.state = ExportState()
        try:
            if not markdown_text or not markdown_text.strip():
                raise EmptyContentError()
            ensure_valid(options)
            generator = self._registry.get(options.format)

            self._advance(ExportPhase.INITIALIZING)
            document = self._generate(generator, markdown_text, options, fallback_filename)

            if generator.uses_styling_phase:
                self._send_to_printer(document)
            else:
                self._deliver(document)

            self._advance(ExportPhase.FINALIZING)
            self._advance(ExportPhase.COMPLETE)
        except ExportError as e:
            return self._fail(e)
        except Exception as e:
            logger.exception("Unexpected export failure")
            wrapped = GenerationError(str(e) or None)
            wrapped.__cause__ = e
            return self._fail(wrapped)
        finally:
            self.state.reset()
            self._publish()

        logger.info("Exported %s as %s", generator.format.value, document.filename)
        if self._notifier is not None:
            self._notifier.success(SUCCESS_TITLE, generator.success_message)
        return ExportOutcome(success=True, message=generator.success_message, document=document)

    # -------------------- helpers --------------------

    def _generate(
        self,
        generator: IFormatGenerator,
        markdown_text: str,
        options: ExportOptions,
        fallback_filename: str,
    ) -> GeneratedDocument:
        try:
            ctx = generator.prepare(markdown_text, options)
            self._advance(ExportPhase.PROCESSING)
            markup = generator.assemble(ctx)
        except ExportError:
            raise
        except Exception as e:
            logger.exception("%s generation failed", generator.label)
            raise GenerationError(str(e) or None) from e

        self._advance(ExportPhase.GENERATING)
        return GeneratedDocument(
            format=generator.format,
            markup=markup,
            filename=generator.suggest_filename(options, fallback_filename),
            mime_type=generator.mime_type,
        )

    def _send_to_printer(self, document: GeneratedDocument) -> None:
        window = self._print_host.open_window() if self._print_host is not None else None
        if window is None:
            raise PopupBlockedError()
        self._advance(ExportPhase.STYLING)

        host = self._print_host

        def print_and_close() -> None:
            try:
                window.print()
            finally:
                window.close()

        # subscribe before writing so a synchronous load is not missed
        window.on_load(lambda: host.schedule(self._settle_ms, print_and_close))
        window.write(document.markup)

    def _deliver(self, document: GeneratedDocument) -> None:
        if self._download_target is None:
            return
        path = self._download_target.deliver(document)
        if path is not None:
            logger.info("Saved %s", path)

    def _fail(self, error: ExportError) -> ExportOutcome:
        message = error.user_message
        title = VALIDATION_TITLE if isinstance(error, ValidationError) else FAILURE_TITLE
        if not isinstance(error, GenerationError):
            logger.warning("Export rejected: %s", message)
        if self._notifier is not None:
            self._notifier.failure(title, message)
        return ExportOutcome(success=False, message=message, error=error)
