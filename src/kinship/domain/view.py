"""View state for the contact list: search, sort, selection, display mode."""

from collections.abc import Iterable
from dataclasses import dataclass, replace
from enum import Enum


class SortField(str, Enum):
    NAME = "name"
    BIRTHDAY = "birthday"
    CREATED = "created"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class DisplayMode(str, Enum):
    GRID = "grid"
    LIST = "list"


def toggle_selection(selected: Iterable[str], contact_id: str) -> frozenset[str]:
    """Return a new selection with contact_id's membership flipped."""
    current = frozenset(selected)
    if contact_id in current:
        return current - {contact_id}
    return current | {contact_id}


def select_all(selected: Iterable[str], visible_ids: Iterable[str]) -> frozenset[str]:
    """Clear when everything visible is already selected, else select all visible."""
    visible = frozenset(visible_ids)
    if frozenset(selected) == visible:
        return frozenset()
    return visible


@dataclass(frozen=True)
class ViewState:
    """
    Ephemeral display parameters for one session's contact list.
    Each transition is a pure replacement that returns a new ViewState.
    """

    query: str = ""
    sort_field: SortField = SortField.NAME
    sort_order: SortOrder = SortOrder.ASC
    selected: frozenset[str] = frozenset()
    display_mode: DisplayMode = DisplayMode.GRID

    def __post_init__(self):
        object.__setattr__(self, "sort_field", SortField(self.sort_field))
        object.__setattr__(self, "sort_order", SortOrder(self.sort_order))
        object.__setattr__(self, "display_mode", DisplayMode(self.display_mode))
        object.__setattr__(self, "selected", frozenset(self.selected))

    def with_query(self, query: str | None) -> "ViewState":
        return replace(self, query=query or "")

    def with_sort(
        self, sort_field: SortField, sort_order: SortOrder | None = None
    ) -> "ViewState":
        return replace(
            self,
            sort_field=sort_field,
            sort_order=sort_order if sort_order is not None else self.sort_order,
        )

    def with_display_mode(self, mode: DisplayMode) -> "ViewState":
        return replace(self, display_mode=mode)

    def toggle_selected(self, contact_id: str) -> "ViewState":
        return replace(self, selected=toggle_selection(self.selected, contact_id))

    def toggle_select_all(self, visible_ids: Iterable[str]) -> "ViewState":
        return replace(self, selected=select_all(self.selected, visible_ids))

    def clear_selection(self) -> "ViewState":
        return replace(self, selected=frozenset())
