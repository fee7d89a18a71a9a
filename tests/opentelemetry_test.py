import pytest

from makit.core.config import Config
from makit.utils.opentelemetry import get_provider


def _emit_span(provider):
    with provider.get_tracer("makit.test").start_as_current_span("makit.run"):
        pass
    provider.shutdown()


@pytest.mark.integration
class TestGetProvider:
    def test_resource(self):
        provider = get_provider()
        attributes = provider.resource.attributes
        assert attributes["service.name"] == "makit"
        assert attributes["service.version"] == "1.0.0"
        assert attributes["deployment.environment"] == "production"

    def test_service_name_override(self):
        config = Config()
        config.telemetry.name = "makit-ci"
        assert get_provider(config).resource.attributes["service.name"] == (
            "makit-ci"
        )

    def test_disabled_exports_nothing(self, capsys):
        config = Config()
        config.debug = True
        _emit_span(get_provider(config))
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_debug_exports_to_console(self, capsys):
        config = Config()
        config.debug = True
        config.telemetry.enabled = True
        provider = get_provider(config)
        assert provider.resource.attributes["deployment.environment"] == (
            "development"
        )
        _emit_span(provider)
        captured = capsys.readouterr()
        assert captured.out == ""
        assert '"name": "makit.run"' in captured.err
