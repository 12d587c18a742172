from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from bs4 import BeautifulSoup

from src.formatting.config import load_formatting_config

logger = logging.getLogger(__name__)


class HtmlRenderer(ABC):
    """Turns an HTML string into its rendered plain text."""

    name: str = "unknown"

    @abstractmethod
    def render_text(self, html: str) -> str:
        ...

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} renderer={self.name!r}>"


class PassthroughRenderer(HtmlRenderer):
    """For contexts with no markup renderer: the input comes back unchanged."""

    name = "passthrough"

    def render_text(self, html: str) -> str:
        return html


class SoupRenderer(HtmlRenderer):
    name = "soup"

    def render_text(self, html: str) -> str:
        return BeautifulSoup(html, "html.parser").get_text()


def get_renderer(name: str) -> HtmlRenderer:
    renderers = {
        PassthroughRenderer.name: PassthroughRenderer,
        SoupRenderer.name: SoupRenderer,
    }
    cls = renderers.get(name)
    if cls is None:
        raise ValueError(f"Unknown HTML renderer: {name}. Use {', '.join(renderers)}.")
    return cls()


def default_renderer() -> HtmlRenderer:
    return get_renderer(load_formatting_config().html_renderer)


def strip_html(html: str | None, renderer: HtmlRenderer | None = None) -> str:
    if html is None:
        return ""
    try:
        if renderer is None:
            renderer = default_renderer()
        return renderer.render_text(html) or ""
    except Exception as e:
        logger.warning("%r failed to render HTML, returning input unchanged: %s", renderer, e)
        return html
