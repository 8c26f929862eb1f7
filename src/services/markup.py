"""
HTML rendering of the calendar state.
"""

import html
from datetime import date

from core.config import WEEKDAY_LABELS
from core.validation import conflict_css_class
from models.events import CalendarView, DayCell, Event
from services.calendar import CalendarState, EventPrompt, build_day_cells


def _attr(value: object) -> str:
    return html.escape(str(value), quote=True)


def _nav_link(view: CalendarView, label: str, element_id: str, base_path: str) -> str:
    href = f"{base_path}?year={view.year}&month={view.month}"
    return f'<a id="{element_id}" href="{_attr(href)}">{label}</a>'


def render_event(event: Event, css_class: str | None) -> str:
    """One event line: '{time} - {title}' with a details tooltip."""
    classes = "event" if css_class is None else f"event {css_class}"
    time_text = event.get("time") or ""
    duration_text = event.get("duration") or ""
    text = f"{time_text} - {event['title']}" if time_text else event["title"]
    details = ", ".join(part for part in (time_text, duration_text) if part)
    tooltip = f"{event['title']} ({details})" if details else event["title"]
    return (
        f'<div class="{classes}" data-id="{_attr(event["id"])}" title="{_attr(tooltip)}">'
        f"{html.escape(text)}</div>"
    )


def render_cell(cell: DayCell, base_path: str, view: CalendarView) -> str:
    classes = ["date-cell"]
    if not cell.is_active:
        classes.append("inactive-month")
    if cell.is_today:
        classes.append("current-day")

    parts = [f'<span class="date-number">{cell.day_number}</span>']
    if not cell.is_active:
        return f'<div class="{" ".join(classes)}">{parts[0]}</div>'

    css_class = conflict_css_class(cell.conflict)
    parts.extend(render_event(event, css_class) for event in cell.events)
    add_href = f"{base_path}?year={view.year}&month={view.month}&add={cell.date}"
    return (
        f'<div class="{" ".join(classes)}" data-date="{cell.date}" '
        f'data-conflict="{cell.conflict.value}">'
        f'<a class="add-event" href="{_attr(add_href)}">'
        f'{"".join(parts)}</a></div>'
    )


def render_prompt(
    prompt: EventPrompt,
    view: CalendarView,
    base_path: str = "/calendar",
    saving: bool = False,
) -> str:
    """
    Add-event form pre-filled with the prompt's values.

    The form posts back to ``base_path`` together with the displayed month;
    the close button links back to that month without the prompt.
    """
    error = ""
    if prompt.error:
        error = f'<p class="form-error">{html.escape(prompt.error)}</p>'
    disabled = " disabled" if prompt.submitting or saving else ""
    close_href = f"{base_path}?year={view.year}&month={view.month}"
    return (
        '<div id="event-modal" class="modal">'
        '<div class="modal-content">'
        f'<a class="close-btn" href="{_attr(close_href)}">&times;</a>'
        f"{error}"
        f'<form id="add-event-form" method="post" action="{_attr(base_path)}">'
        f'<input type="hidden" name="year" value="{view.year}">'
        f'<input type="hidden" name="month" value="{view.month}">'
        f'<input id="event-date" name="date" type="date" required value="{_attr(prompt.date)}">'
        f'<input id="event-title" name="title" type="text" required value="{_attr(prompt.title)}">'
        f'<input id="event-time" name="time" type="time" value="{_attr(prompt.time)}">'
        f'<input id="event-duration" name="duration" type="text" value="{_attr(prompt.duration)}">'
        f'<textarea id="event-description" name="description">{html.escape(prompt.description)}</textarea>'
        f'<button type="submit"{disabled}>Add Event</button>'
        "</form>"
        "</div>"
        "</div>"
    )


def render_month_html(state: CalendarState, today: date, base_path: str = "/calendar") -> str:
    """
    Render the month header, navigation, grid and (when open) the prompt.
    """
    view = state.view
    cells = build_day_cells(view, list(state.events), today)

    lines = [
        '<section class="calendar">',
        '<header class="calendar-header">',
        _nav_link(view.prev(), "&lsaquo;", "prev-month-btn", base_path),
        f'<h2 id="current-month-year">{html.escape(view.label)}</h2>',
        _nav_link(view.next(), "&rsaquo;", "next-month-btn", base_path),
        "</header>",
    ]
    if state.error:
        lines.append(f'<p class="calendar-error">{html.escape(state.error)}</p>')
    lines.append('<div class="weekdays">')
    lines.extend(f"<div>{label}</div>" for label in WEEKDAY_LABELS)
    lines.append("</div>")
    lines.append('<div id="calendar-grid">')
    lines.extend(render_cell(cell, base_path, view) for cell in cells)
    lines.append("</div>")
    if state.prompt is not None:
        lines.append(render_prompt(state.prompt, view, base_path, state.saving))
    lines.append("</section>")
    return "\n".join(lines)
