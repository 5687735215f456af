"""
Notification Templates

Subject and body templates for created and updated shifts, rendered with
Jinja2. HTML bodies are autoescaped; plain text bodies are not.
"""

from dataclasses import dataclass
from datetime import datetime

from jinja2 import Environment, StrictUndefined, UndefinedError
import structlog

from shiftbot.config import Settings
from shiftbot.models.events import ChangeEvent, ChangeState

log = structlog.get_logger()

DATE_FORMAT = "%a, %d %b %Y %H:%M:%S UTC"

SUBJECT_TEMPLATES = {
    ChangeState.CREATED: "New shift added: {{ name }}",
    ChangeState.UPDATED: "Shift updated: {{ name }}",
}

TEXT_TEMPLATES = {
    ChangeState.CREATED: """Greetings,

New shift added for '{{ name }}' starting on {{ date }}{% if location %} at {{ location }}{% endif %}.

{{ shift_url }}

Thank you,
{{ signature }}""",
    ChangeState.UPDATED: """Greetings,

The '{{ name }}' shift has been updated on {{ date }}. It starts on {{ start }}{% if location %} at {{ location }}{% endif %}.

{{ shift_url }}

Thank you,
{{ signature }}""",
}

HTML_TEMPLATES = {
    ChangeState.CREATED: """Greetings,
<p>
New shift added for <a href="{{ shift_url }}">{{ name }}</a> starting on {{ date }}{% if location %} at {{ location }}{% endif %}.
</p>
<p>
Thank you,<br>
{{ signature }}
</p>""",
    ChangeState.UPDATED: """Greetings,
<p>
The <a href="{{ shift_url }}">{{ name }}</a> shift has been updated on {{ date }}. It starts on {{ start }}{% if location %} at {{ location }}{% endif %}.
</p>
<p>
Thank you,<br>
{{ signature }}
</p>""",
}

_text_env = Environment(autoescape=False, undefined=StrictUndefined)
_html_env = Environment(autoescape=True, undefined=StrictUndefined)


@dataclass(frozen=True)
class NotificationMessage:
    """Rendered email content."""

    subject: str
    text_body: str
    html_body: str


def format_date(value: datetime) -> str:
    return value.strftime(DATE_FORMAT)


def template_vars(event: ChangeEvent, settings: Settings) -> dict[str, str]:
    """
    Variables shared by all templates.

    `date` is when the shift starts for new shifts, and when it was changed
    for updated ones.
    """
    shift = event.shift
    start = format_date(shift.starts_at)
    changed_at = start if event.state is ChangeState.CREATED else format_date(shift.updated)

    return {
        "name": shift.name,
        "date": changed_at,
        "start": start,
        "location": shift.location.describe() if shift.location else "",
        "shift_url": f"{settings.shift_url_base.rstrip('/')}/{shift.id}",
        "signature": settings.notification_signature,
    }


def construct_message(event: ChangeEvent, settings: Settings) -> NotificationMessage:
    """
    Render subject, text body and HTML body for a change event.

    Raises:
        ValueError: If a template references an unknown variable
    """
    variables = template_vars(event, settings)

    log.debug(
        "rendering_notification",
        state=event.state.value,
        shift_id=event.shift.id,
    )

    try:
        return NotificationMessage(
            subject=_text_env.from_string(SUBJECT_TEMPLATES[event.state]).render(**variables),
            text_body=_text_env.from_string(TEXT_TEMPLATES[event.state]).render(**variables),
            html_body=_html_env.from_string(HTML_TEMPLATES[event.state]).render(**variables),
        )
    except UndefinedError as e:
        log.error(
            "template_render_failed",
            error=str(e),
            available_vars=list(variables.keys()),
        )
        raise ValueError(f"Template render failed: {e}") from e
