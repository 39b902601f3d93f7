import pytest
import structlog
from pydantic import ValidationError

from netcoach.config import Settings
from netcoach.features.prioritization.domain.models import RelevanceWeights
from netcoach.infrastructure.observability import logging as logging_module


def test_default_relevance_weights():
    settings = Settings(_env_file=None)

    assert settings.default_relevance_weights() == RelevanceWeights(30, 25, 15, 15, 15)
    assert settings.DEFAULT_WEEKLY_CAPACITY == 5


def test_relevance_weights_from_environment(monkeypatch):
    monkeypatch.setenv("RELEVANCE_WEIGHT_INDUSTRY", "0")
    monkeypatch.setenv("RELEVANCE_WEIGHT_SKILLS", "40")

    weights = Settings(_env_file=None).default_relevance_weights()

    assert weights.industry == 0
    assert weights.skills == 40
    assert weights.role == 25


def test_negative_weight_rejected(monkeypatch):
    monkeypatch.setenv("RELEVANCE_WEIGHT_ROLE", "-5")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_setup_logging_configures_structlog():
    logging_module.setup_logging("debug")

    assert structlog.is_configured()
    assert logging_module.get_logger(__name__) is not None


class _RecordingLogger:
    def __init__(self):
        self.calls = []

    def info(self, event, **kw):
        self.calls.append(("info", event, kw))

    def warning(self, event, **kw):
        self.calls.append(("warning", event, kw))


@pytest.mark.parametrize(
    "failed, level",
    [(0, "info"), (2, "warning")],
)
def test_batch_outcome_level(monkeypatch, failed, level):
    recorder = _RecordingLogger()
    monkeypatch.setattr(logging_module, "get_logger", lambda name=None: recorder)

    logging_module.log_batch_outcome("contact_sweep", total=5, succeeded=5 - failed, failed=failed, updated_count=1)

    [(called_level, _, fields)] = recorder.calls
    assert called_level == level
    assert fields["operation"] == "contact_sweep"
    assert fields["failed"] == failed
    assert fields["updated_count"] == 1
