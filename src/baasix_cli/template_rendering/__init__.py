"""Scaffold template rendering exports."""

from .template_renderer import TEMPLATE_DIR, render_template

__all__ = ["TEMPLATE_DIR", "render_template"]
