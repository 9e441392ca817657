"""Tarjetas de presentación del tablero de reportes."""
import re
from dataclasses import dataclass
from typing import Callable, List, Optional

from app.config import settings
from app.models.report import Report
from app.services.grouping import BoardEntry, BoardView

UNTITLED = "Untitled Report"
NO_DESCRIPTION = "No description provided."


@dataclass(frozen=True)
class ReportCard:
    heading: str
    description: str
    building: str
    concern: str
    status: str
    status_class: str
    submitted: str
    image_url: str
    similar_label: Optional[str] = None
    badge_label: Optional[str] = None


def status_class(status: Optional[str]) -> str:
    return re.sub(r"\s+", "-", (status or settings.DEFAULT_STATUS).lower())


def similar_label(count: int) -> Optional[str]:
    if count <= 0:
        return None
    return f"View {count} similar {'report' if count == 1 else 'reports'}"


def _submitted(report: Report) -> str:
    created = report.created_at
    if created.tzinfo is not None:
        created = created.astimezone()
    return created.date().isoformat()


def make_card(entry: BoardEntry, image_resolver: Callable[[Report], str]) -> ReportCard:
    report = entry.report
    status = report.status or settings.DEFAULT_STATUS
    return ReportCard(
        heading=report.heading or UNTITLED,
        description=report.description or NO_DESCRIPTION,
        building=report.building or "",
        concern=report.concern or "",
        status=status,
        status_class=status_class(status),
        submitted=_submitted(report),
        image_url=image_resolver(report),
        similar_label=similar_label(entry.similar_count),
        badge_label=f"{entry.badge_count} in group" if entry.badge_count > 1 else None,
    )


def render_board(view: BoardView, image_resolver: Callable[[Report], str]) -> str:
    lines: List[str] = []
    if view.is_group_view:
        lines.append(f"Similar Reports for {view.selected_group.label}  [Back]")
    else:
        lines.append("Buildings: " + " | ".join(view.building_options))
        lines.append("Concerns: " + " | ".join(view.concern_options))
        lines.append(f"[{'x' if view.show_duplicates else ' '}] Show Duplicates")
    lines.append("")

    if not view.entries:
        lines.append("No reports.")
    for entry in view.entries:
        card = make_card(entry, image_resolver)
        title = card.heading
        if card.badge_label:
            title = f"{title}  ({card.badge_label})"
        lines.append(title)
        lines.append(f"  {card.description}")
        lines.append(f"  Building: {card.building}  Concern: {card.concern}  Status: {card.status}")
        lines.append(f"  Submitted: {card.submitted}  Image: {card.image_url}")
        if card.similar_label:
            lines.append(f"  > {card.similar_label}")
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"
