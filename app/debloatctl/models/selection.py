"""Filter selection model.

Holds the transient search and filter choices of a session.
"""

from dataclasses import dataclass, replace

from debloatctl.models.package import ALL_LISTS, StateFilter


@dataclass(frozen=True, slots=True)
class FilterSelection:
    """Current search text and filter choices.

    The defaults match the selection shown when an inventory is
    first loaded: every list, installed packages only.

    Attributes:
        search: Substring to look for in package names (empty matches all).
        list_name: Catalog list to show, or 'All'.
        state: Install state to show.
    """

    search: str = ""
    list_name: str = ALL_LISTS
    state: StateFilter = StateFilter.INSTALLED

    def __post_init__(self) -> None:
        """Reject selections the filter engine cannot evaluate."""
        if not isinstance(self.state, StateFilter):
            msg = f"Invalid state filter: {self.state!r}"
            raise TypeError(msg)
        if not self.list_name:
            msg = "List filter cannot be empty"
            raise ValueError(msg)

    def with_search(self, search: str) -> "FilterSelection":
        return replace(self, search=search)

    def with_list(self, list_name: str) -> "FilterSelection":
        return replace(self, list_name=list_name)

    def with_state(self, state: StateFilter) -> "FilterSelection":
        return replace(self, state=state)
