"""
Popup content for incident markers.

``content_for`` resolves everything a marker popup shows into a plain
``PopupContent`` value; ``PopupContent.to_html`` turns it into the HTML that
goes into the Leaflet popup.
"""

import html
from dataclasses import dataclass
from typing import Any

from ..reports.categories import resolve_category
from ..reports.model import IncidentReport, ReportStatus

UNKNOWN_DATE = "Unknown date"


def escape_text(value: Any) -> str:
    """HTML-escape user text for popup and tooltip output."""
    if value is None:
        return ""
    escaped = html.escape(str(value))
    # Folium emits popup and tooltip HTML inside JavaScript template literals
    for char, entity in (('`', '&#96;'), ('$', '&#36;'), ('{', '&#123;'), ('}', '&#125;')):
        escaped = escaped.replace(char, entity)
    return escaped


@dataclass(frozen=True)
class PopupContent:
    """Structured display content for one report."""
    badge_label: str
    badge_color: str
    title: str
    date_text: str
    description: str
    status: ReportStatus
    status_label: str

    def to_html(self) -> str:
        return f"""
        <div style="min-width: 200px; padding: 8px; font-family: 'Segoe UI', Arial, sans-serif;">
            <div style="background: {escape_text(self.badge_color)}; color: white; padding: 4px 8px;
                        border-radius: 4px; font-size: 12px; font-weight: bold; margin-bottom: 8px;">
                {escape_text(self.badge_label)}
            </div>
            <h3 style="margin: 0 0 8px 0; font-size: 14px;">{escape_text(self.title)}</h3>
            <p style="margin: 0 0 6px 0; font-size: 12px; color: #666;"><strong>Date:</strong> {escape_text(self.date_text)}</p>
            <p style="margin: 0; font-size: 12px; color: #666;"><strong>Description:</strong> {escape_text(self.description)}</p>
            <div style="margin-top: 8px; padding: 4px; background: #f3f4f6; border-radius: 4px; font-size: 11px;">
                Status: <strong>{escape_text(self.status_label)}</strong>
            </div>
        </div>
        """

    def tooltip_text(self) -> str:
        """Escaped one-line hover text: category label and location."""
        return f"{escape_text(self.badge_label)}: {escape_text(self.title)}"


def content_for(report: IncidentReport) -> PopupContent:
    """Build popup content for a report; unresolved categories show as Other."""
    category = resolve_category(report.category)
    date_text = report.timestamp.strftime('%x') if report.timestamp else UNKNOWN_DATE
    return PopupContent(
        badge_label=category.label,
        badge_color=category.color,
        title=report.location,
        date_text=date_text,
        description=report.description,
        status=report.status,
        status_label=report.status.label,
    )
