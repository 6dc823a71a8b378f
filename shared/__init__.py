"""Shared utility package for cross-layer value objects and interfaces."""

from .interfaces import IRenderer, IRendererFactory, IScheduler  # noqa: F401
from .render_data import (  # noqa: F401
    DigSnapshot,
    LevelResult,
    MatchSnapshot,
    MazeSnapshot,
    PortalSnapshot,
)
