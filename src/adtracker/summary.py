# AdTracker - Profitability dashboard engine for digital-marketing teams
# Copyright (c) 2025 AdTracker contributors
# Licensed under the MIT License. See LICENSE file for details.

"""
AI performance summary for AdTracker.

The engine computes the numbers; an external language model turns them into
a short executive summary. This module owns the boundary with that
collaborator:

- ``build_summary_request()`` assembles a bounded payload: the dashboard
  metrics plus the most recent ad entries and extra expenses (at most
  ``sample_size`` of each),
- ``generate_summary()`` sends it through the OpenAI chat completions API
  and returns the text as-is (it is neither parsed nor validated beyond
  being non-empty).

Failures (missing API key, API errors, empty answers) raise SummaryError so
the caller can decide how to degrade.
"""

import json
import logging
import os
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Optional

from openai import APIError, OpenAI

from .engine import DashboardMetrics
from .models import AdEntry, ExtraExpense

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_SAMPLE_SIZE = 10
MAX_OUTPUT_TOKENS = 600

SYSTEM_PROMPT = """\
You are a senior financial analyst specialised in digital marketing and paid
traffic (dropshipping and info-products). You receive the dashboard metrics
of a small marketing team as JSON and write a short executive summary.

Instructions:
1. Use Markdown.
2. Be direct and objective.
3. Say whether ROAS is healthy: above 2.0 is good, below 1.5 is a warning.
4. Comment on the impact of extra expenses (BMs, chargebacks, tools) on the
   final profit.
5. Give one tactical tip based on the numbers.
"""


class SummaryError(RuntimeError):
    """Raised when the AI summary cannot be generated."""


@dataclass(frozen=True)
class SummaryRequest:
    payload: Mapping[str, Any]
    model: str


def _recent(records: Iterable[Any], sample_size: int) -> list[Any]:
    """The last ``sample_size`` records by date (stable for equal dates)."""
    if sample_size <= 0:
        return []
    ordered = sorted(records, key=lambda record: record.date)
    return ordered[-sample_size:]


def _ad_record(ad: AdEntry) -> dict[str, Any]:
    return {
        "date": ad.date.isoformat(),
        "offer_id": ad.offer_id,
        "spend": round(ad.spend, 2),
        "revenue": round(ad.revenue, 2),
    }


def _expense_record(expense: ExtraExpense) -> dict[str, Any]:
    return {
        "date": expense.date.isoformat(),
        "category": expense.category.label,
        "amount": round(expense.amount, 2),
        "description": expense.description or "",
    }


def build_summary_request(
    metrics: DashboardMetrics,
    ads: Iterable[AdEntry],
    expenses: Iterable[ExtraExpense],
    *,
    sample_size: int = DEFAULT_SAMPLE_SIZE,
    model: str = DEFAULT_MODEL,
    currency: str = "BRL",
    period_label: Optional[str] = None,
) -> SummaryRequest:
    """Build the bounded payload sent to the language model."""
    payload: dict[str, Any] = {
        "currency": currency,
        "metrics": {
            "total_revenue": round(metrics.total_revenue, 2),
            "total_spend": round(metrics.total_spend, 2),
            "total_extras": round(metrics.total_extras, 2),
            "net_profit": round(metrics.net_profit, 2),
            "roas": round(metrics.roas, 2),
            "roi_pct": round(metrics.roi, 2),
        },
        "recent_ads": [_ad_record(ad) for ad in _recent(ads, sample_size)],
        "recent_expenses": [
            _expense_record(e) for e in _recent(expenses, sample_size)
        ],
    }
    if period_label:
        payload["period"] = period_label

    return SummaryRequest(payload=payload, model=model)


def _default_client_factory() -> OpenAI:
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        raise SummaryError("Missing OpenAI API key. Set the OPENAI_API_KEY variable.")

    client_kwargs: dict[str, Any] = {"api_key": api_key}
    base_url = os.getenv("OPENAI_BASE_URL")
    if base_url:
        client_kwargs["base_url"] = base_url
    return OpenAI(**client_kwargs)


def generate_summary(
    request: SummaryRequest,
    *,
    client_factory: Optional[Callable[[], Any]] = None,
) -> str:
    """
    Ask the language model for a summary of ``request``.

    Args:
        request: Payload built by build_summary_request().
        client_factory: Returns an OpenAI-compatible client (injectable for
            tests). Defaults to a client configured from the environment.

    Raises:
        SummaryError: on configuration errors, API errors or an empty answer.
    """
    client = (client_factory or _default_client_factory)()

    user_message = (
        "Analyse the performance data below.\n\n"
        "Data (JSON):\n"
        f"{json.dumps(request.payload, ensure_ascii=False, indent=2)}"
    )
    logger.debug("Requesting AI summary with model %s", request.model)

    try:
        response = client.chat.completions.create(
            model=request.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": user_message},
            ],
            max_tokens=MAX_OUTPUT_TOKENS,
            temperature=0.2,
        )
    except APIError as exc:
        raise SummaryError(f"OpenAI API error: {exc}") from exc

    try:
        text = response.choices[0].message.content or ""
    except (AttributeError, IndexError) as exc:  # pragma: no cover - unexpected SDK output
        raise SummaryError("Unexpected response format from OpenAI API") from exc

    if not text.strip():
        raise SummaryError("OpenAI response was empty")
    return text.strip()
