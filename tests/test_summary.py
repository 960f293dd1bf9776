from datetime import date
from types import SimpleNamespace

import httpx
import pytest
from openai import APIError

from adtracker.engine import build_metrics
from adtracker.models import AdEntry, ExtraExpense
from adtracker.summary import (
    MAX_OUTPUT_TOKENS,
    SummaryError,
    build_summary_request,
    generate_summary,
)


class _FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _client(completions: _FakeCompletions):
    return lambda: SimpleNamespace(chat=SimpleNamespace(completions=completions))


def _request():
    return build_summary_request(build_metrics(300, 100, 50), [], [], model="test-model")


def test_payload_is_bounded_to_most_recent_records() -> None:
    ads = [
        AdEntry(id=f"a{day}", date=date(2024, 5, day), offer_id="o1", spend=1, revenue=2)
        for day in (5, 1, 3, 4, 2)
    ]
    expenses = [
        ExtraExpense(id="e1", date=date(2024, 5, 1), amount=10, category="tools_saas"),
        ExtraExpense(id="e2", date=date(2024, 5, 9), amount=20, description="Refund"),
    ]

    request = build_summary_request(
        build_metrics(300, 100, 50),
        ads,
        expenses,
        sample_size=2,
        currency="EUR",
        period_label="Last 7 days",
    )
    payload = request.payload

    assert [ad["date"] for ad in payload["recent_ads"]] == ["2024-05-04", "2024-05-05"]
    assert len(payload["recent_expenses"]) == 2
    assert payload["recent_expenses"][0]["category"] == "Tools / SaaS"
    assert payload["currency"] == "EUR"
    assert payload["period"] == "Last 7 days"
    assert payload["metrics"]["net_profit"] == pytest.approx(150)
    assert payload["metrics"]["roi_pct"] == pytest.approx(100)


def test_zero_sample_size_sends_metrics_only() -> None:
    ads = [AdEntry(id="a", date=date(2024, 5, 1), offer_id="o1", spend=1, revenue=2)]
    request = build_summary_request(build_metrics(2, 1, 0), ads, [], sample_size=0)

    assert request.payload["recent_ads"] == []
    assert "period" not in request.payload


def test_generate_summary_returns_stripped_text() -> None:
    completions = _FakeCompletions(content="  **ROAS is healthy.**\n")

    text = generate_summary(_request(), client_factory=_client(completions))

    assert text == "**ROAS is healthy.**"
    (call,) = completions.calls
    assert call["model"] == "test-model"
    assert call["max_tokens"] == MAX_OUTPUT_TOKENS
    assert call["messages"][0]["role"] == "system"
    assert '"net_profit": 150' in call["messages"][1]["content"]


@pytest.mark.parametrize("content", ["", "   ", None])
def test_empty_answer_raises(content) -> None:
    with pytest.raises(SummaryError):
        generate_summary(_request(), client_factory=_client(_FakeCompletions(content)))


def test_api_error_is_wrapped() -> None:
    error = APIError(
        "boom",
        request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions"),
        body=None,
    )

    with pytest.raises(SummaryError, match="boom"):
        generate_summary(_request(), client_factory=_client(_FakeCompletions(error=error)))


def test_missing_api_key_raises(monkeypatch) -> None:
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    with pytest.raises(SummaryError, match="OPENAI_API_KEY"):
        generate_summary(_request())
