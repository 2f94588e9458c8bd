"""Rendering: HTML helpers, per-type strategies and the render dispatcher."""

from formwork.rendering.buttons import BUTTON_RENDERERS
from formwork.rendering.dispatcher import RenderDispatcher
from formwork.rendering.inputs import INPUT_RENDERERS

__all__ = ["BUTTON_RENDERERS", "INPUT_RENDERERS", "RenderDispatcher"]
