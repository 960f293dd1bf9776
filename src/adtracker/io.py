# AdTracker - Profitability dashboard engine for digital-marketing teams
# Copyright (c) 2025 AdTracker contributors
# Licensed under the MIT License. See LICENSE file for details.

"""
I/O module for AdTracker.

This module reads the CSV exports of the hosted store and translates them
into the record types of ``models.py``. It is the only place that knows
about storage field names: the engine only ever sees semantic fields.

Expected input files
--------------------
Column names are case-insensitive; both snake_case (as stored) and camelCase
(as exported by the web app) spellings are accepted.

    offers.csv     id, name, status, product_price, product_cost
    ads.csv        id, date, offer_id, spend, revenue
    expenses.csv   id, date, category, amount, description
    recurring.csv  id, name, amount, day_of_month, category
    projects.csv   id, name, description, status, created_at
    tasks.csv      id, project_id, text, completed, assignee_id,
                   instructions, assignee_notes, completed_at,
                   instruction_author, notes_author

Optional columns (product_price, product_cost, description, category,
status, ...) may be missing or empty. Dates are read as calendar days
("YYYY-MM-DD"); any time component is dropped without timezone conversion.
Enum cells accept the value, the English label or the label persisted by
the hosted store ("Em Teste", "BM / Contingência", ...).

Invalid structures or values raise a ValueError naming the file and row.
"""

import logging
import os
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any, Optional, TypeVar, Union

import pandas as pd

from .config import DataPaths
from .models import AdEntry, Dataset, ExtraExpense, Offer, RecurringExpense
from .projects import Project, Task

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

T = TypeVar("T")

# camelCase export names (lower-cased) -> stored snake_case names
_COLUMN_ALIASES: dict[str, str] = {
    "offerid": "offer_id",
    "productprice": "product_price",
    "productcost": "product_cost",
    "dayofmonth": "day_of_month",
    "projectid": "project_id",
    "assigneeid": "assignee_id",
    "assigneenotes": "assignee_notes",
    "completedat": "completed_at",
    "createdat": "created_at",
    "instructionauthor": "instruction_author",
    "notesauthor": "notes_author",
    "label": "description",
}

_TRUE_VALUES = {"1", "true", "yes", "y", "t"}


def _clean(value: Any) -> Any:
    """Return None for empty/NaN cells, the value otherwise."""
    if value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        return value
    return value


def _to_bool(value: Any) -> bool:
    cleaned = _clean(value)
    if cleaned is None:
        return False
    if isinstance(cleaned, bool):
        return cleaned
    return str(cleaned).strip().lower() in _TRUE_VALUES


def _read_frame(path: PathLike, required: set[str]) -> pd.DataFrame:
    """
    Read a CSV file as strings and normalize its column names.

    Raises:
        ValueError: if a required column is missing.
    """
    df = pd.read_csv(path, dtype=str, keep_default_na=True)

    columns = []
    for col in df.columns:
        name = str(col).strip().lower()
        columns.append(_COLUMN_ALIASES.get(name, name))
    df.columns = columns

    missing = required - set(df.columns)
    if missing:
        raise ValueError(
            f"Invalid structure in {path}: missing column(s) "
            f"{', '.join(sorted(missing))}. "
            f"Expected at least: {', '.join(sorted(required))}."
        )
    return df


def _build_records(
    path: PathLike,
    df: pd.DataFrame,
    factory: Callable[[dict[str, Any]], T],
) -> list[T]:
    records: list[T] = []
    for index, raw in enumerate(df.to_dict(orient="records"), start=2):
        row = {key: _clean(value) for key, value in raw.items()}
        try:
            records.append(factory(row))
        except ValueError as exc:
            # Line numbers count the header as line 1.
            raise ValueError(f"{path}, line {index}: {exc}") from exc
    return records


def read_offers(path: PathLike) -> list[Offer]:
    """Read offers; a missing status defaults to 'testing'."""
    df = _read_frame(path, {"id", "name"})
    return _build_records(
        path,
        df,
        lambda row: Offer(
            id=row["id"],
            name=row["name"] or "",
            status=row.get("status") or "testing",
            product_price=row.get("product_price"),
            product_cost=row.get("product_cost"),
        ),
    )


def read_ads(path: PathLike) -> list[AdEntry]:
    """Read ad entries; empty spend/revenue cells count as 0."""
    df = _read_frame(path, {"id", "date", "offer_id", "spend", "revenue"})
    return _build_records(
        path,
        df,
        lambda row: AdEntry(
            id=row["id"],
            date=row["date"],
            offer_id=row["offer_id"],
            spend=row["spend"] or 0.0,
            revenue=row["revenue"] or 0.0,
        ),
    )


def read_expenses(path: PathLike) -> list[ExtraExpense]:
    """Read manual extra expenses; a missing category defaults to 'other'."""
    df = _read_frame(path, {"id", "date", "amount"})
    return _build_records(
        path,
        df,
        lambda row: ExtraExpense(
            id=row["id"],
            date=row["date"],
            amount=row["amount"],
            category=row.get("category") or "other",
            description=row.get("description"),
        ),
    )


def read_recurring(path: PathLike) -> list[RecurringExpense]:
    """Read recurring expense definitions."""
    df = _read_frame(path, {"id", "name", "amount", "day_of_month"})
    return _build_records(
        path,
        df,
        lambda row: RecurringExpense(
            id=row["id"],
            name=row["name"] or "",
            amount=row["amount"],
            day_of_month=row["day_of_month"],
            category=row.get("category") or "other",
        ),
    )


def read_projects(path: PathLike) -> list[Project]:
    df = _read_frame(path, {"id", "name"})
    return _build_records(
        path,
        df,
        lambda row: Project(
            id=row["id"],
            name=row["name"] or "",
            description=row.get("description"),
            status=row.get("status") or "active",
            created_at=row.get("created_at"),
        ),
    )


def read_tasks(path: PathLike) -> list[Task]:
    df = _read_frame(path, {"id", "project_id", "text"})
    return _build_records(
        path,
        df,
        lambda row: Task(
            id=row["id"],
            project_id=row["project_id"],
            text=row["text"] or "",
            completed=_to_bool(row.get("completed")),
            assignee_id=row.get("assignee_id"),
            instructions=row.get("instructions"),
            assignee_notes=row.get("assignee_notes"),
            completed_at=row.get("completed_at"),
            instruction_author=row.get("instruction_author"),
            notes_author=row.get("notes_author"),
        ),
    )


def _read_optional(
    path: Optional[Path],
    reader: Callable[[PathLike], list[T]],
    kind: str,
) -> list[T]:
    if path is None or not Path(path).is_file():
        logger.warning("No %s file found at %s, using an empty collection.", kind, path)
        return []
    return reader(path)


def find_orphan_ads(offers: Iterable[Offer], ads: Iterable[AdEntry]) -> list[AdEntry]:
    """Ad entries whose offer no longer exists."""
    known = {offer.id for offer in offers}
    return [ad for ad in ads if ad.offer_id not in known]


def load_dataset(paths: DataPaths) -> Dataset:
    """
    Load offers, ads, expenses and recurring definitions.

    Missing files are treated as empty collections (with a warning), so a
    fresh installation without recurring expenses still works. Ad entries
    that reference a deleted offer are kept; they are only reported.
    """
    offers = _read_optional(paths.offers, read_offers, "offers")
    ads = _read_optional(paths.ads, read_ads, "ads")
    expenses = _read_optional(paths.expenses, read_expenses, "expenses")
    recurring = _read_optional(paths.recurring, read_recurring, "recurring expenses")

    orphans = find_orphan_ads(offers, ads)
    if orphans:
        logger.warning(
            "%d ad entries reference deleted offers (%s).",
            len(orphans),
            ", ".join(sorted({ad.offer_id for ad in orphans})),
        )

    return Dataset(offers=offers, ads=ads, expenses=expenses, recurring=recurring)


def load_projects(paths: DataPaths) -> tuple[list[Project], list[Task]]:
    """Load projects and tasks; missing files yield empty lists."""
    projects = _read_optional(paths.projects, read_projects, "projects")
    tasks = _read_optional(paths.tasks, read_tasks, "tasks")
    return projects, tasks
