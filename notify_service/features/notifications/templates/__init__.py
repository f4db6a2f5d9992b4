"""Email templates for notifications."""

from .renderer import EmailTemplateRenderer, RenderedEmail, TemplateRenderError

__all__ = ["EmailTemplateRenderer", "RenderedEmail", "TemplateRenderError"]
