"""Caller-driven stepping for a search instance."""

from __future__ import annotations

import logging
from typing import Iterator

from gridstar.sim.astar import AStarSearch
from gridstar.sim.contracts import StepResult

logger = logging.getLogger(__name__)


def run_steps(search: AStarSearch, steps: int | None = None) -> Iterator[StepResult]:
    step_count = 0
    while not search.is_finished and (steps is None or step_count < steps):
        yield search.step()
        step_count += 1


class SearchRunner:
    """Continuous mode: an outside timer calls ``tick()`` at its own cadence.

    Each tick performs at most one ``step()``, so the caller can observe the
    maze between expansions. ``stop()`` ends the search; ``pause()`` only
    stops stepping.
    """

    def __init__(self, search: AStarSearch) -> None:
        self.search = search
        self._active = False

    @property
    def is_running(self) -> bool:
        return self._active and not self.search.is_finished

    def run(self) -> None:
        if self.search.is_finished:
            return
        self._active = True
        logger.debug("Runner started at step %s", self.search.steps)

    def pause(self) -> None:
        self._active = False

    def stop(self) -> None:
        self._active = False
        self.search.stop()

    def tick(self) -> StepResult | None:
        if not self.is_running:
            self._active = False
            return None
        result = self.search.step()
        if self.search.is_finished:
            self._active = False
        return result
