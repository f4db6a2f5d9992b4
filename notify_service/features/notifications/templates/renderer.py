"""Jinja2 rendering of notification emails.

Templates are compiled once in a SandboxedEnvironment. The HTML variant is
autoescaped so caller-supplied titles and bodies cannot inject markup.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from jinja2 import StrictUndefined, TemplateError
from jinja2.sandbox import SandboxedEnvironment

from notify_service.infra.logging import get_lazy_logger

HTML_TEMPLATE = """\
<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <style>
    body { font-family: Arial, sans-serif; line-height: 1.6; color: #1f2933; background-color: #f5f7fa; margin: 0; padding: 0; }
    .container { max-width: 600px; margin: 0 auto; }
    .header { background: #1f3a5f; padding: 30px 20px; text-align: center; }
    .header h1 { margin: 0; color: #ffffff; font-size: 26px; letter-spacing: 2px; }
    .content { background-color: #ffffff; padding: 40px 30px; border: 1px solid #e4e7eb; }
    .content h2 { margin-top: 0; }
    .button { display: inline-block; background-color: #1f3a5f; color: #ffffff; padding: 14px 35px; text-decoration: none; border-radius: 6px; margin: 25px 0; font-weight: bold; }
    .preferences { border-top: 1px solid #e4e7eb; padding-top: 20px; margin-top: 30px; color: #616e7c; font-size: 12px; }
    .footer { text-align: center; padding: 25px 20px; color: #616e7c; font-size: 12px; }
  </style>
</head>
<body>
  <div class="container">
    <div class="header"><h1>{{ brand_name | upper }}</h1></div>
    <div class="content">
      <p class="greeting">Dear {{ recipient_name }},</p>
      <h2>{{ title }}</h2>
      <p>{{ body }}</p>
      <div style="text-align: center;">
        <a href="{{ action_url }}" class="button">View in Portal</a>
      </div>
      <div class="preferences">
        <p>To change your notification preferences, log into your portal at
        <a href="{{ portal_url }}">{{ portal_url }}</a> and open your profile settings.</p>
      </div>
    </div>
    <div class="footer">
      <p>&copy; {{ year }} {{ brand_name }}. All rights reserved.</p>
    </div>
  </div>
</body>
</html>
"""

TEXT_TEMPLATE = """\
{{ title }}

Dear {{ recipient_name }},

{{ body }}

View in portal: {{ action_url }}

To change your notification preferences, log into your portal at {{ portal_url }} and open your profile settings.

(c) {{ year }} {{ brand_name }}. All rights reserved.
"""


class TemplateRenderError(Exception):
    """Raised when an email template cannot be rendered."""

    def __init__(self, message: str, template_name: str | None = None) -> None:
        super().__init__(message)
        self.template_name = template_name


@dataclass(frozen=True, slots=True)
class RenderedEmail:
    """Rendered email bodies."""

    html: str
    text: str


class EmailTemplateRenderer:
    """Renders the notification email in HTML and plain text."""

    def __init__(
        self,
        *,
        html_template: str = HTML_TEMPLATE,
        text_template: str = TEXT_TEMPLATE,
    ) -> None:
        self._lazy = get_lazy_logger(__name__)
        html_env = SandboxedEnvironment(autoescape=True, undefined=StrictUndefined)
        text_env = SandboxedEnvironment(
            autoescape=False, undefined=StrictUndefined, keep_trailing_newline=False
        )
        try:
            self._html = html_env.from_string(html_template)
            self._text = text_env.from_string(text_template)
        except TemplateError as exc:
            raise TemplateRenderError(f"Invalid email template: {exc}") from exc

    def render(
        self,
        *,
        recipient_name: str,
        title: str,
        body: str,
        action_url: str,
        portal_url: str,
        brand_name: str,
    ) -> RenderedEmail:
        """Render both variants.

        Raises:
            TemplateRenderError: If rendering fails.
        """
        context: dict[str, Any] = {
            "recipient_name": recipient_name,
            "title": title,
            "body": body,
            "action_url": action_url,
            "portal_url": portal_url,
            "brand_name": brand_name,
            "year": datetime.now(UTC).year,
        }
        try:
            html = self._html.render(context)
            text = self._text.render(context).strip()
        except TemplateError as exc:
            raise TemplateRenderError(f"Failed to render notification email: {exc}") from exc

        self._lazy.debug(lambda: f"Rendered notification email ({len(html)} bytes html)")
        return RenderedEmail(html=html, text=text)
