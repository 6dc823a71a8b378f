"""Shared protocol definitions."""

from __future__ import annotations

from typing import Protocol, Callable, Any, TYPE_CHECKING, runtime_checkable

from shared.render_data import MatchSnapshot

if TYPE_CHECKING:  # pragma: no cover - used for type hints only
    from controller.match_controller import MatchController


@runtime_checkable
class IRenderer(Protocol):
    """Protocol describing renderer capabilities required by the controller."""

    def run(self) -> None: ...

    def reset_board(self) -> None: ...

    def render(self, snapshot: MatchSnapshot) -> None: ...

    def attach_update_loop(
        self, update_fn: Callable[[], bool], interval: float
    ) -> bool:
        """Take over stepping: call ``update_fn`` every ``interval`` seconds until it
        returns False. Return False to leave stepping to the caller."""
        ...

    def report_status(self, message: str) -> None: ...


@runtime_checkable
class IRendererFactory(Protocol):
    """Protocol for factories that produce renderers for a controller."""

    def __call__(self, controller: MatchController) -> IRenderer: ...


@runtime_checkable
class IScheduler(Protocol):
    """Protocol for the repeating-timer service used by level countdowns."""

    def schedule_interval(self, callback: Callable[[], Any], interval_ms: int) -> Any: ...

    def cancel(self, handle: Any) -> None: ...
