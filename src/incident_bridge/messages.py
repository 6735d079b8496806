"""Slack message text rendered from the bundled Markdown templates.

Templates use ``{{ name }}`` placeholders. Rendering is all-or-nothing: a
placeholder without a value raises RenderError so no partial message is sent.
"""

import re
from functools import lru_cache
from importlib import resources

from incident_bridge.errors import RenderError

_PLACEHOLDER = re.compile(r"{{\s*(.*?)\s*}}")


@lru_cache
def load_template(name: str) -> str:
    """Read a template from the package's templates directory."""
    return resources.files("incident_bridge").joinpath("templates", name).read_text(
        encoding="utf-8"
    )


def render(template: str, **values: object) -> str:
    """Substitute every ``{{ key }}`` placeholder in ``template`` with ``values[key]``."""

    def _replace(match: re.Match) -> str:
        key = match.group(1)
        if key not in values:
            raise RenderError(f"No value for template placeholder '{key}'")
        return str(values[key])

    return _PLACEHOLDER.sub(_replace, template).strip()


def help_text(user: str, app: str) -> str:
    return render(load_template("msg-help.md"), user=user, app=app)


def user_triggered(user: str, text: str) -> str:
    return render(load_template("msg-triggered.md"), user=user, text=text)


def incident_triggered(title: str, html_url: str, incident_id: str, urgency: str, number: int) -> str:
    return render(
        load_template("msg-pd-incident-triggered.md"),
        title=title,
        html_url=html_url,
        id=incident_id,
        urgency=urgency,
        number=number,
    )


def incident_acknowledged(title: str, html_url: str, number: int, user: str) -> str:
    return render(
        load_template("msg-pd-incident-acknowledged.md"),
        title=title,
        html_url=html_url,
        number=number,
        user=user,
    )


def incident_reassigned(title: str, html_url: str, number: int, assignees: str) -> str:
    return render(
        load_template("msg-pd-incident-reassigned.md"),
        title=title,
        html_url=html_url,
        number=number,
        user=assignees,
    )


def incident_resolved(title: str, html_url: str, number: int, user: str) -> str:
    return render(
        load_template("msg-pd-incident-resolved.md"),
        title=title,
        html_url=html_url,
        number=number,
        user=user,
    )


def incident_status(user: str, incident_id: str, status: str) -> str:
    return render(
        load_template("msg-pd-incident-status.md"),
        user=user,
        incident_id=incident_id,
        status=status,
    )
