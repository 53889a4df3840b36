"""Tables of measurement items grouped into pages."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class DBItem:
    """One data point with its identifiers and extra attributes."""

    data_id: str = ""
    log_id: str = ""
    value: float = 0.0
    extra_fields: dict[str, Any] = field(default_factory=dict)

    def to_map(self) -> dict[str, Any]:
        """Return the item as a flat mapping; extra fields override the basics."""
        result: dict[str, Any] = {
            "dataId": self.data_id,
            "logId": self.log_id,
            "value": self.value,
        }
        result.update(sorted(self.extra_fields.items()))
        return result


class DBTableManager:
    """Pages of items, one of which is current."""

    def __init__(self, pages: dict[str, dict[str, DBItem]] | None = None, current_page: str = "") -> None:
        self.pages: dict[str, dict[str, DBItem]] = dict(pages) if pages else {}
        self.current_page = current_page

    def current_page_data(self) -> dict[str, dict[str, Any]]:
        """Return every item of the current page as a mapping, keyed by name."""
        page = self.pages.get(self.current_page, {})
        return {key: page[key].to_map() for key in sorted(page)}


def make_page1_data() -> dict[str, DBItem]:
    """Return the items of the first test page."""
    items = {
        "U1": DBItem("U1", "L001", 0.0, {"unit": "V"}),
        "I1": DBItem("I1", "L002", 0.0, {"unit": "A"}),
        "T1": DBItem("T1", "L003", 0.0, {"unit": "℃"}),
    }
    return {key: items[key] for key in sorted(items)}