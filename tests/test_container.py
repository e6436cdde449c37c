from conftest import FakeIni, FakeNotifier, FakePrintHost, FakeThemeContext
from mdexport.di.container import Container
from mdexport.domain.models import ExportFormat, ExportOptions
from mdexport.services.config.app_config import ExportConfig
from mdexport.services.export_orchestrator import ExportOrchestrator
from mdexport.services.hosts import FileDownloadTarget, LogNotifier, QtMessageService, QtPrintHost, QtThemeContext


def _container(settings_service, **kw) -> Container:
    kw.setdefault("config", ExportConfig(ini=FakeIni()))
    return Container(settings=settings_service, **kw)


def _options(**kw) -> ExportOptions:
    return ExportOptions(format=ExportFormat.EBOOK, title="t", author="a").replace(**kw)


def test_container_wires_services_and_registers_generators(settings_service):
    c = _container(settings_service)
    assert c.converter is not None
    assert c.file_service is not None
    assert c.settings_service is settings_service
    assert isinstance(c.theme_context, QtThemeContext)
    assert isinstance(c.notifier, LogNotifier)
    assert isinstance(c.print_host, QtPrintHost)

    formats = {g.format for g in c.registry.all()}
    assert formats == set(ExportFormat)


def test_generators_share_the_container_theme_context(settings_service):
    ctx = FakeThemeContext()
    c = _container(settings_service, theme_context=ctx)
    c.registry.get(ExportFormat.EBOOK).prepare("# x", _options())
    assert ctx.calls == 1


def test_resolve_output_dir_precedence(settings_service, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    c = _container(settings_service)
    assert c.resolve_output_dir() == tmp_path

    settings_service.set_output_dir(str(tmp_path / "remembered"))
    assert c.resolve_output_dir() == tmp_path / "remembered"

    configured = _container(
        settings_service,
        config=ExportConfig(ini=FakeIni({"export": {"output_dir": str(tmp_path / "cfg")}})),
    )
    assert configured.resolve_output_dir() == tmp_path / "cfg"
    assert configured.resolve_output_dir(tmp_path / "cli") == tmp_path / "cli"


def test_build_orchestrator_exports_into_folder(settings_service, tmp_path):
    notifier, host = FakeNotifier(), FakePrintHost()
    c = _container(
        settings_service,
        notifier=notifier,
        print_host=host,
        config=ExportConfig(ini=FakeIni({"export": {"print_settle_ms": "5"}})),
    )
    target = c.build_download_target(tmp_path)
    assert isinstance(target, FileDownloadTarget)
    assert target.output_dir == tmp_path

    orch = c.build_orchestrator(output_dir=tmp_path)
    assert isinstance(orch, ExportOrchestrator)
    outcome = orch.export("# Hi\n\ntext", _options(format=ExportFormat.WORD, title="Hi"))
    assert outcome.success
    assert (tmp_path / "Hi.doc").exists()
    assert notifier.successes

    orch.export("# Hi\n\ntext", _options(format=ExportFormat.PRINT))
    assert host.delays == [5]


def test_default_uses_given_qsettings(qsettings):
    c = Container.default(qsettings, config=ExportConfig(ini=FakeIni()))
    c.settings_service.set_last_format("ebook")
    assert qsettings.value("export/last_format") == "ebook"


def test_default_gui_uses_message_boxes(qsettings):
    gui = Container.default(qsettings, config=ExportConfig(ini=FakeIni()), gui=True)
    assert isinstance(gui.notifier, QtMessageService)
    cli = Container.default(qsettings, config=ExportConfig(ini=FakeIni()))
    assert isinstance(cli.notifier, LogNotifier)
