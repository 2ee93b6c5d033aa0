import asyncio
from types import SimpleNamespace

import pytest

from conftest import FakeModel

from report_api.core.config import Settings
from report_api.core.errors import ClientDisconnectedError, ConfigurationError, PayloadValidationError, UpstreamError
from report_api.core.utils import run_until_disconnected, split_report
from report_api.models.mock_model import MockReportModel
from report_api.models.openai_model import OpenAIReportModel
from report_api.prompts import build_messages
from report_api.schemas import ReportRequest
from report_api.services.report_service import ReportService, build_model


class _Completions:
    def __init__(self, content):
        self.content = content
        self.kwargs = []

    async def create(self, **kwargs):
        self.kwargs.append(kwargs)
        if self.content is None:
            return SimpleNamespace(choices=[])
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=self.content))])


def _fake_openai(content):
    completions = _Completions(content)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


def _request(**overrides):
    data = {
        "address": "1 rue Test",
        "propertyType": "Appartement",
        "notes": "visite ok",
        "detailLevel": "standard",
    }
    data.update(overrides)
    return ReportRequest(**data)


def test_openai_model_makes_one_call_with_fixed_parameters():
    client, completions = _fake_openai("Rapport")
    model = OpenAIReportModel(client, model="gpt-4.1", temperature=0.7)
    messages = build_messages(_request())

    text = asyncio.run(model.complete(messages))

    assert text == "Rapport"
    assert completions.kwargs == [{"model": "gpt-4.1", "messages": messages, "temperature": 0.7}]


def test_openai_model_without_choices_returns_none():
    client, _ = _fake_openai(None)
    model = OpenAIReportModel(client, model="gpt-4.1")

    assert asyncio.run(model.complete([])) is None


def test_openai_model_from_settings_disables_retries():
    model = OpenAIReportModel.from_settings(Settings(OPENAI_API_KEY="sk-test", OPENAI_MODEL="gpt-4.1"))

    assert model.model == "gpt-4.1"
    assert model.temperature == 0.7
    assert model.client.max_retries == 0


def test_build_model_providers():
    assert build_model(Settings(OPENAI_API_KEY=None)) is None
    assert isinstance(build_model(Settings(OPENAI_API_KEY="sk-test")), OpenAIReportModel)
    assert isinstance(build_model(Settings(MODEL_PROVIDER="mock", OPENAI_API_KEY=None)), MockReportModel)
    with pytest.raises(ValueError):
        build_model(Settings(MODEL_PROVIDER="nope"))


def test_mock_model_output_splits_into_two_panes():
    text = asyncio.run(MockReportModel().complete(build_messages(_request(address="3 place du Parlement"))))

    parts = split_report(text)

    assert "3 place du Parlement" in parts.report
    assert parts.market_summary.startswith("## Synthèse de marché localisée")


def test_service_checks_configuration_before_payload():
    svc = ReportService(model=None)

    with pytest.raises(ConfigurationError):
        asyncio.run(svc.generate(ReportRequest()))


@pytest.mark.parametrize("data", [[1, 2], "texte", None])
def test_parse_rejects_bodies_that_are_not_a_request(data):
    with pytest.raises(PayloadValidationError):
        ReportService(model=FakeModel()).parse(data)


def test_parse_keeps_loose_numbers():
    req = ReportService(model=FakeModel()).parse({"surface": "120 m2", "yearBuilt": 1998.5})

    assert (req.surface, req.year_built) == ("120 m2", 1998.5)


def test_service_wraps_upstream_errors():
    svc = ReportService(model=FakeModel(error=TimeoutError("slow")))

    with pytest.raises(UpstreamError) as excinfo:
        asyncio.run(svc.generate(_request()))

    assert isinstance(excinfo.value.__cause__, TimeoutError)
    assert excinfo.value.status_code == 500


class _Caller:
    def __init__(self, disconnected):
        self.disconnected = disconnected
        self.checks = 0

    async def is_disconnected(self):
        self.checks += 1
        return self.disconnected


def test_run_until_disconnected_returns_result_when_client_stays():
    async def work():
        await asyncio.sleep(0.03)
        return "ok"

    caller = _Caller(disconnected=False)

    assert asyncio.run(run_until_disconnected(caller, work(), poll_seconds=0.01)) == "ok"
    assert caller.checks >= 1


def test_run_until_disconnected_cancels_pending_work():
    cancelled = []

    async def work():
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.append(True)
            raise

    async def scenario():
        with pytest.raises(ClientDisconnectedError):
            await run_until_disconnected(_Caller(disconnected=True), work(), poll_seconds=0.01)
        # let the cancelled task run its handler
        await asyncio.sleep(0.01)

    asyncio.run(scenario())

    assert cancelled == [True]


def test_service_reports_disconnect_as_499():
    class SlowModel:
        async def complete(self, messages):
            await asyncio.sleep(10)

    svc = ReportService(model=SlowModel(), disconnect_poll_seconds=0.01)

    with pytest.raises(ClientDisconnectedError) as excinfo:
        asyncio.run(svc.generate(_request(), request=_Caller(disconnected=True)))

    assert excinfo.value.status_code == 499
