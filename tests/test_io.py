import logging
from datetime import date
from pathlib import Path

import pytest

from adtracker.config import DataPaths
from adtracker.io import (
    find_orphan_ads,
    load_dataset,
    load_projects,
    read_ads,
    read_expenses,
    read_offers,
    read_projects,
    read_recurring,
    read_tasks,
)
from adtracker.models import ExpenseCategory, OfferStatus
from adtracker.projects import ProjectStatus


def _write(path: Path, content: str) -> Path:
    path.write_text(content, encoding="utf-8")
    return path


def test_read_offers_with_optional_columns(tmp_path) -> None:
    csv_path = _write(
        tmp_path / "offers.csv",
        "id,name,status,product_price,product_cost\n"
        "o1,Robot vacuum,running,100,40\n"
        "o2,LED mask,,,\n",
    )

    offers = read_offers(csv_path)

    assert [o.id for o in offers] == ["o1", "o2"]
    assert offers[0].status is OfferStatus.RUNNING
    assert offers[0].product_price == pytest.approx(100)
    assert offers[1].status is OfferStatus.TESTING
    assert offers[1].product_price is None


def test_read_ads_accepts_camel_case_headers(tmp_path) -> None:
    """Exports from the web app use camelCase column names."""
    csv_path = _write(
        tmp_path / "ads.csv",
        "id,date,offerId,spend,revenue\n"
        "a1,2024-05-01T10:00:00Z,o1,100,300\n"
        "a2,2024-05-02,o1,,12.5\n",
    )

    ads = read_ads(csv_path)

    assert ads[0].date == date(2024, 5, 1)
    assert ads[0].offer_id == "o1"
    assert ads[1].spend == 0.0
    assert ads[1].revenue == pytest.approx(12.5)


def test_read_expenses_label_alias_and_default_category(tmp_path) -> None:
    csv_path = _write(
        tmp_path / "expenses.csv",
        "id,date,amount,category,label\n"
        "e1,2024-05-02,30,domain_hosting,Domain renewal\n"
        "e2,2024-05-03,12,,\n",
    )

    expenses = read_expenses(csv_path)

    assert expenses[0].category is ExpenseCategory.DOMAIN_HOSTING
    assert expenses[0].description == "Domain renewal"
    assert expenses[1].category is ExpenseCategory.OTHER
    assert expenses[1].description is None


def test_read_recurring(tmp_path) -> None:
    csv_path = _write(
        tmp_path / "recurring.csv",
        "id,name,amount,dayOfMonth,category\n"
        "r1,Spy tool,20,2,tools_saas\n",
    )

    (rec,) = read_recurring(csv_path)

    assert rec.day_of_month == 2
    assert rec.category is ExpenseCategory.TOOLS_SAAS


def test_store_labels_are_accepted(tmp_path) -> None:
    """Exports carry the labels persisted by the hosted store."""
    offers_path = _write(
        tmp_path / "offers.csv",
        "id,name,status\n"
        "o1,Mask,Em Teste\n"
        "o2,Vacuum,Rodando / Escala\n"
        "o3,Lamp,Em Produção\n",
    )
    expenses_path = _write(
        tmp_path / "expenses.csv",
        "id,date,amount,category\n"
        "e1,2024-05-02,30,BM / Contingência\n"
        "e2,2024-05-03,12,Domínio / Hospedagem\n"
        "e3,2024-05-04,5,Outros\n",
    )
    recurring_path = _write(
        tmp_path / "recurring.csv",
        "id,name,amount,day_of_month,category\n"
        "r1,Spy tool,20,2,Ferramentas / SaaS\n",
    )
    projects_path = _write(
        tmp_path / "projects.csv",
        "id,name,status\np1,Launch,Concluído\n",
    )

    offers = read_offers(offers_path)
    expenses = read_expenses(expenses_path)
    (rec,) = read_recurring(recurring_path)
    (project,) = read_projects(projects_path)

    assert [o.status for o in offers] == [
        OfferStatus.TESTING,
        OfferStatus.RUNNING,
        OfferStatus.PRODUCING,
    ]
    assert [e.category for e in expenses] == [
        ExpenseCategory.BM_CONTINGENCY,
        ExpenseCategory.DOMAIN_HOSTING,
        ExpenseCategory.OTHER,
    ]
    assert rec.category is ExpenseCategory.TOOLS_SAAS
    assert project.status is ProjectStatus.DONE


def test_missing_column_raises(tmp_path) -> None:
    csv_path = _write(tmp_path / "ads.csv", "id,date,spend,revenue\na1,2024-05-01,1,2\n")

    with pytest.raises(ValueError, match="offer_id"):
        read_ads(csv_path)


def test_invalid_value_reports_file_and_line(tmp_path) -> None:
    csv_path = _write(
        tmp_path / "ads.csv",
        "id,date,offer_id,spend,revenue\n"
        "a1,2024-05-01,o1,10,20\n"
        "a2,2024-05-02,o1,-5,20\n",
    )

    with pytest.raises(ValueError, match="line 3"):
        read_ads(csv_path)


def test_invalid_day_of_month_raises(tmp_path) -> None:
    csv_path = _write(
        tmp_path / "recurring.csv",
        "id,name,amount,day_of_month\nr1,Tool,10,32\n",
    )

    with pytest.raises(ValueError):
        read_recurring(csv_path)


def test_read_tasks_parses_booleans(tmp_path) -> None:
    csv_path = _write(
        tmp_path / "tasks.csv",
        "id,project_id,text,completed,completed_at\n"
        "t1,p1,Write copy,true,2024-05-01\n"
        "t2,p1,Record video,,\n",
    )

    tasks = read_tasks(csv_path)

    assert tasks[0].completed is True
    assert tasks[0].completed_at == date(2024, 5, 1)
    assert tasks[1].completed is False


def test_load_dataset_missing_files_are_empty(tmp_path, caplog) -> None:
    offers = _write(tmp_path / "offers.csv", "id,name\no1,Mask\n")
    ads = _write(
        tmp_path / "ads.csv",
        "id,date,offer_id,spend,revenue\na1,2024-05-01,o9,1,2\n",
    )
    paths = DataPaths(
        offers=offers,
        ads=ads,
        expenses=tmp_path / "missing_expenses.csv",
        recurring=tmp_path / "missing_recurring.csv",
    )

    with caplog.at_level(logging.WARNING, logger="adtracker.io"):
        dataset = load_dataset(paths)

    assert len(dataset.offers) == 1
    assert len(dataset.ads) == 1
    assert dataset.expenses == ()
    assert dataset.recurring == ()
    assert "deleted offers" in caplog.text
    assert "missing_recurring.csv" in caplog.text


def test_find_orphan_ads(sample_dataset) -> None:
    orphans = find_orphan_ads(sample_dataset.offers, sample_dataset.ads)
    assert [ad.id for ad in orphans] == ["a4"]


def test_load_projects_without_files(tmp_path) -> None:
    paths = DataPaths(
        offers=tmp_path / "o.csv",
        ads=tmp_path / "a.csv",
        expenses=tmp_path / "e.csv",
        recurring=tmp_path / "r.csv",
    )
    assert load_projects(paths) == ([], [])
