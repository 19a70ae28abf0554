"""View partitioner: themes/contents split and month/client filters."""
import itertools
import uuid
from datetime import date

import pytest

from acod.models.content import Content
from acod.services import views

GUIDELINE_VALUES = [None, "indefinido", "pendente", "aprovado", "rejeitado"]


def _item(d: date, guideline: str | None, client_id: uuid.UUID | None = None) -> Content:
    return Content(
        date=d,
        day_of_week="",
        feed_theme="tema",
        approved_guidelines=guideline,
        user_id=uuid.uuid4(),
        client_id=client_id,
    )


@pytest.fixture
def items() -> list[Content]:
    dates = [date(2023, 3, 1), date(2024, 3, 31), date(2024, 4, 1), date(2025, 12, 25)]
    return [_item(d, g) for d, g in itertools.product(dates, GUIDELINE_VALUES)]


def test_partition_is_total_and_disjoint(items):
    themes = views.partition(items, "themes")
    contents = views.partition(items, "contents")

    theme_ids = {id(i) for i in themes}
    content_ids = {id(i) for i in contents}

    assert theme_ids | content_ids == {id(i) for i in items}
    assert theme_ids & content_ids == set()


@pytest.mark.parametrize(
    "guideline, view",
    [
        (None, "contents"),
        ("indefinido", "contents"),
        ("pendente", "themes"),
        ("aprovado", "themes"),
        ("rejeitado", "themes"),
    ],
)
def test_each_guideline_value_lands_in_one_view(guideline, view):
    item = _item(date(2024, 1, 1), guideline)
    assert views.partition([item], view) == [item]
    other = "themes" if view == "contents" else "contents"
    assert views.partition([item], other) == []


def test_month_all_is_a_no_op(items):
    assert views.filter_by_month(items, "all") == items


def test_month_filter_ignores_year(items):
    march = views.filter_by_month(items, "3")
    assert march
    assert all(i.date.month == 3 for i in march)
    assert {i.date.year for i in march} == {2023, 2024}
    assert len(march) == len([i for i in items if i.date.month == 3])


def test_month_filter_accepts_int(items):
    assert views.filter_by_month(items, 12) == [i for i in items if i.date.month == 12]


@pytest.mark.parametrize("bad", ["0", "13", "march"])
def test_month_filter_rejects_bad_values(items, bad):
    with pytest.raises(ValueError):
        views.filter_by_month(items, bad)


def test_client_filter():
    a, b = uuid.uuid4(), uuid.uuid4()
    rows = [_item(date(2024, 1, 1), "pendente", a), _item(date(2024, 1, 2), "pendente", b)]

    assert views.filter_by_client(rows, "all") == rows
    assert views.filter_by_client(rows, None) == rows
    assert views.filter_by_client(rows, a) == [rows[0]]
    assert views.filter_by_client(rows, str(b)) == [rows[1]]


def test_build_view_combines_filters_and_keeps_order():
    a, b = uuid.uuid4(), uuid.uuid4()
    rows = [
        _item(date(2024, 3, 20), "pendente", a),
        _item(date(2024, 3, 10), "indefinido", a),
        _item(date(2024, 3, 5), "aprovado", a),
        _item(date(2024, 3, 1), "pendente", b),
        _item(date(2024, 2, 1), "pendente", a),
    ]

    result = views.build_view(rows, "themes", month="3", client_id=a)

    assert result == [rows[0], rows[2]]


def test_unknown_view_mode():
    with pytest.raises(ValueError):
        views.partition([], "calendar")
