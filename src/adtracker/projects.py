# AdTracker - Profitability dashboard engine for digital-marketing teams
# Copyright (c) 2025 AdTracker contributors
# Licensed under the MIT License. See LICENSE file for details.

"""
Lightweight project and task bookkeeping.

Projects group tasks; a project's progress is the share of completed tasks.
Task edits are attributed to the current actor, an identifier resolved by
the caller (no identity validation happens here).

Records are immutable: every edit returns a new Task.
"""

from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import date
from typing import Optional

import pandas as pd

from .models import LabelledEnum, parse_day

PROGRESS_COLUMNS: list[str] = ["id", "name", "status", "done", "total", "progress"]


class ProjectStatus(LabelledEnum):
    ACTIVE = ("active", "Active", "Ativo")
    PAUSED = ("paused", "Paused", "Pausado")
    DONE = ("done", "Done", "Concluído")


@dataclass(frozen=True)
class Project:
    id: str
    name: str
    description: Optional[str] = None
    status: ProjectStatus = ProjectStatus.ACTIVE
    created_at: Optional[date] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "id", str(self.id))
        object.__setattr__(self, "status", ProjectStatus.parse(self.status))
        if self.created_at is not None:
            object.__setattr__(self, "created_at", parse_day(self.created_at))


@dataclass(frozen=True)
class Task:
    id: str
    project_id: str
    text: str
    completed: bool = False
    assignee_id: Optional[str] = None
    instructions: Optional[str] = None
    assignee_notes: Optional[str] = None
    completed_at: Optional[date] = None
    instruction_author: Optional[str] = None
    notes_author: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "id", str(self.id))
        object.__setattr__(self, "project_id", str(self.project_id))
        if self.completed_at is not None:
            object.__setattr__(self, "completed_at", parse_day(self.completed_at))


def compute_progress(tasks: Iterable[Task]) -> int:
    """Completed tasks as a rounded percentage of all tasks (0 when none)."""
    items = list(tasks)
    if not items:
        return 0
    done = sum(1 for task in items if task.completed)
    return round(done / len(items) * 100)


def toggle_task(task: Task, today: date) -> Task:
    """Flip completion; completing stamps ``completed_at``, reopening clears it."""
    if task.completed:
        return replace(task, completed=False, completed_at=None)
    return replace(task, completed=True, completed_at=parse_day(today))


def annotate_task(
    task: Task,
    actor: str,
    *,
    instructions: Optional[str] = None,
    assignee_notes: Optional[str] = None,
) -> Task:
    """
    Update a task's instructions and/or assignee notes.

    Each edited field records ``actor`` as its author. Fields left as None
    are not touched.

    Raises:
        ValueError: if ``actor`` is blank.
    """
    if not actor or not str(actor).strip():
        raise ValueError("A current actor is required to edit a task.")

    updated = task
    if instructions is not None:
        updated = replace(
            updated, instructions=instructions, instruction_author=str(actor).strip()
        )
    if assignee_notes is not None:
        updated = replace(
            updated, assignee_notes=assignee_notes, notes_author=str(actor).strip()
        )
    return updated


def project_progress(
    projects: Iterable[Project],
    tasks: Iterable[Task],
) -> pd.DataFrame:
    """One row per project with done/total task counts and progress (%)."""
    tasks_by_project: dict[str, list[Task]] = {}
    for task in tasks:
        tasks_by_project.setdefault(task.project_id, []).append(task)

    rows = []
    for project in projects:
        project_tasks = tasks_by_project.get(project.id, [])
        rows.append(
            {
                "id": project.id,
                "name": project.name,
                "status": project.status.label,
                "done": sum(1 for t in project_tasks if t.completed),
                "total": len(project_tasks),
                "progress": compute_progress(project_tasks),
            }
        )

    if not rows:
        return pd.DataFrame(columns=PROGRESS_COLUMNS)
    return pd.DataFrame(rows, columns=PROGRESS_COLUMNS)
