"""Presentation overlay and render payloads for reports.

Aggregation results never carry presentation state. Operator edits
(display label, visibility, color, manual order) live in a ReportOverlay
keyed by category label and are merged in when a payload is built, so a
fresh aggregation keeps them as long as the labels are stable.
"""

import json
from dataclasses import asdict, dataclass, field
from typing import Any, Optional, Sequence

from timesheet_explorer.domain.entities import (
    CategoryTotal,
    Granularity,
    TimePeriod,
    TimesheetRecord,
)
from timesheet_explorer.domain.errors import ValidationError
from timesheet_explorer.domain.time_buckets import period_label

THEMES = {
    "Default": ["#3B82F6", "#10B981", "#F59E0B", "#EF4444", "#8B5CF6", "#EC4899", "#06B6D4", "#84CC16", "#F97316", "#6366F1"],
    "Professional": ["#2C3E50", "#3498DB", "#E74C3C", "#F39C12", "#1ABC9C", "#9B59B6", "#34495E", "#16A085", "#27AE60", "#E67E22"],
    "Pastel": ["#FFB3BA", "#BAFFC9", "#BAE1FF", "#FFFFBA", "#FFD8BA", "#E0BBE4", "#C7CEEA", "#FFDFD3", "#B4F8C8", "#FBE7C6"],
    "Ocean": ["#006994", "#1E88E5", "#42A5F5", "#64B5F6", "#90CAF9", "#BBDEFB", "#0097A7", "#00ACC1", "#26C6DA", "#4DD0E1"],
    "Monochrome": ["#1A1A1A", "#333333", "#4D4D4D", "#666666", "#808080", "#999999", "#B3B3B3", "#CCCCCC", "#E6E6E6", "#F0F0F0"],
}


@dataclass
class OverlayEntry:
    """Presentation edits for one category label."""

    display_label: Optional[str] = None
    visible: bool = True
    color: Optional[str] = None


@dataclass(frozen=True)
class ReportItem:
    """A ranked category merged with its presentation edits."""

    label: str
    display_label: str
    value: float
    visible: bool
    color: Optional[str]


@dataclass
class ReportOverlay:
    """Presentation edits keyed by category label, plus a manual order."""

    entries: dict[str, OverlayEntry] = field(default_factory=dict)
    order: list[str] = field(default_factory=list)

    def entry(self, label: str) -> OverlayEntry:
        return self.entries.setdefault(label, OverlayEntry())

    def set_display_label(self, label: str, display_label: str) -> None:
        display_label = (display_label or "").strip()
        if display_label:
            self.entry(label).display_label = display_label

    def set_visible(self, label: str, visible: bool) -> None:
        self.entry(label).visible = visible

    def toggle_visibility(self, label: str) -> bool:
        entry = self.entry(label)
        entry.visible = not entry.visible
        return entry.visible

    def set_color(self, label: str, color: str) -> None:
        self.entry(label).color = color

    def move(self, labels: Sequence[str], label: str, new_index: int) -> None:
        """Move ``label`` to ``new_index`` within the currently shown ``labels``."""
        current = list(labels)
        if label not in current:
            raise ValidationError(f"Category '{label}' is not in the report")
        current.remove(label)
        new_index = max(0, min(new_index, len(current)))
        current.insert(new_index, label)
        self.order = current + [item for item in self.order if item not in current]

    def apply(self, ranked: Sequence[CategoryTotal]) -> list[ReportItem]:
        """Merge edits into ranked results, manual order first."""
        by_label = {item.label: item for item in ranked}
        ordered = [label for label in self.order if label in by_label]
        ordered += [item.label for item in ranked if item.label not in ordered]

        items = []
        for label in ordered:
            entry = self.entries.get(label, OverlayEntry())
            items.append(
                ReportItem(
                    label=label,
                    display_label=entry.display_label or label,
                    value=by_label[label].value,
                    visible=entry.visible,
                    color=entry.color,
                )
            )
        return items

    def to_dict(self) -> dict[str, Any]:
        return {
            "entries": {label: asdict(entry) for label, entry in self.entries.items()},
            "order": list(self.order),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ReportOverlay":
        entries = {
            label: OverlayEntry(
                display_label=values.get("display_label"),
                visible=values.get("visible", True),
                color=values.get("color"),
            )
            for label, values in (data.get("entries") or {}).items()
        }
        return cls(entries=entries, order=list(data.get("order") or []))

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    @classmethod
    def from_json(cls, text: str) -> "ReportOverlay":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid overlay JSON: {e}")
        if not isinstance(data, dict):
            raise ValidationError("Overlay must be a JSON object")
        return cls.from_dict(data)


def category_color(
    label: str,
    labels: Sequence[str],
    overlay: Optional[ReportOverlay] = None,
    theme: str = "Default",
) -> str:
    """Color for a category: overlay color, else a palette slot by sorted position."""
    if overlay is not None:
        entry = overlay.entries.get(label)
        if entry is not None and entry.color:
            return entry.color

    colors = THEMES.get(theme, THEMES["Default"])
    ordered = sorted(set(labels))
    index = ordered.index(label) if label in ordered else len(ordered)
    return colors[index % len(colors)]


def ranked_chart_data(
    ranked: Sequence[CategoryTotal], overlay: Optional[ReportOverlay] = None
) -> dict[str, list]:
    """Render payload ``{labels, values}`` for a ranked report."""
    items = (overlay or ReportOverlay()).apply(ranked)
    visible = [item for item in items if item.visible]
    return {
        "labels": [item.display_label for item in visible],
        "values": [item.value for item in visible],
    }


def time_series_data(
    periods: Sequence[TimePeriod],
    ranked: Sequence[CategoryTotal],
    granularity: Granularity,
    overlay: Optional[ReportOverlay] = None,
) -> dict[str, list]:
    """Render payload ``{periods, categories, matrix}`` for a time series.

    Categories are the visible ranked labels that occur in at least one
    period; ``matrix[i][j]`` is the hours of category i in period j.
    """
    items = (overlay or ReportOverlay()).apply(ranked)
    present = {category for period in periods for category in period.breakdown}
    categories = [item.label for item in items if item.visible and item.label in present]
    return {
        "periods": [period_label(period.key, granularity) for period in periods],
        "categories": categories,
        "matrix": [
            [period.breakdown.get(category, 0.0) for period in periods]
            for category in categories
        ],
    }


def summary_stats(records: Sequence[TimesheetRecord]) -> dict[str, Any]:
    """Headline numbers for a record set."""
    return {
        "total_records": len(records),
        "total_hours": sum(record.hours for record in records),
        "unique_people": len({r.full_name for r in records if r.full_name}),
        "unique_issues": len({r.issue_key for r in records if r.issue_key}),
    }
