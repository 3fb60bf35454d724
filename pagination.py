from __future__ import annotations

from dataclasses import dataclass
from typing import List

from data_loader import FieldDescriptor, Survey


class NavigationError(ValueError):
    """Raised when a page transition is not available from the current page."""


@dataclass
class PageState:
    """
    Current page of a survey, 1-based and bounded by [1, max_page].
    Only next() and previous() move it, one page at a time.
    """

    max_page: int
    page: int = 1

    @classmethod
    def for_survey(cls, survey: Survey) -> "PageState":
        return cls(max_page=survey.max_page)

    @property
    def can_go_previous(self) -> bool:
        return self.page > 1

    @property
    def can_go_next(self) -> bool:
        return self.page < self.max_page

    @property
    def can_submit(self) -> bool:
        return self.page == self.max_page

    def next(self) -> int:
        if not self.can_go_next:
            raise NavigationError(f"Already on the last page ({self.max_page}).")
        self.page += 1
        return self.page

    def previous(self) -> int:
        if not self.can_go_previous:
            raise NavigationError("Already on the first page.")
        self.page -= 1
        return self.page


def fields_on_page(survey: Survey, page: int) -> List[FieldDescriptor]:
    # Gaps in pageNo numbering yield empty pages; callers show a notice.
    return [f for f in survey.fields if f.page_no == page]
