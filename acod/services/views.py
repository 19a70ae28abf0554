# acod/services/views.py
"""
Themes / contents view partition.

Items that never went through theme review (approved_guidelines is
'indefinido' or NULL) belong to the contents queue; every other value,
'pendente' included, puts the item in the themes queue. The two views
are total and disjoint over any input.

Filters run before the partition and keep the input order.
"""
import uuid
from typing import Iterable

from acod.models.content import Content
from acod.models.enums import GuidelineApproval

ALL = "all"

THEMES = "themes"
CONTENTS = "contents"


def in_themes_view(approved_guidelines: str | None) -> bool:
    return approved_guidelines not in (None, GuidelineApproval.UNDEFINED.value)


def parse_month(month: str | int) -> int | None:
    """
    Normalize a month filter value.

    Returns:
        None for "all", otherwise 1..12.

    Raises:
        ValueError: for anything else.
    """
    if month == ALL:
        return None
    value = int(month)
    if not 1 <= value <= 12:
        raise ValueError(f"month must be 'all' or 1-12, got {month!r}")
    return value


def filter_by_month(items: Iterable[Content], month: str | int) -> list[Content]:
    selected = parse_month(month)
    if selected is None:
        return list(items)
    return [item for item in items if item.date.month == selected]


def filter_by_client(items: Iterable[Content], client_id: uuid.UUID | str | None) -> list[Content]:
    if client_id is None or client_id == ALL:
        return list(items)
    if not isinstance(client_id, uuid.UUID):
        client_id = uuid.UUID(client_id)
    return [item for item in items if item.client_id == client_id]


def partition(items: Iterable[Content], view_mode: str) -> list[Content]:
    """
    Keep the items that belong to `view_mode` ("themes" or "contents").
    """
    if view_mode == THEMES:
        return [item for item in items if in_themes_view(item.approved_guidelines)]
    if view_mode == CONTENTS:
        return [item for item in items if not in_themes_view(item.approved_guidelines)]
    raise ValueError(f"Unknown view mode: {view_mode!r}")


def build_view(
    items: Iterable[Content],
    view_mode: str,
    month: str | int = ALL,
    client_id: uuid.UUID | str | None = ALL,
) -> list[Content]:
    """Month filter, then client filter, then partition."""
    selected = filter_by_month(items, month)
    selected = filter_by_client(selected, client_id)
    return partition(selected, view_mode)
