"""Injectable reporting sinks for max-flow runs.

The engine never writes to a console on its own. A caller that wants
step-by-step output passes an object satisfying `FlowReporter`; the engine
calls it once per augmentation and once when the run ends.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol

from ekflow.algorithms.types import AugmentingPath
from ekflow.logging import get_logger


class FlowReporter(Protocol):
    """Protocol for objects receiving engine progress callbacks."""

    def on_augment(self, iteration: int, path: AugmentingPath) -> None:
        """Called after ``path`` has been applied to the residual network.

        Args:
            iteration: 1-based augmentation number within the run.
            path: The augmentation just applied.
        """
        ...

    def on_complete(self, total_flow: int, iterations: int) -> None:
        """Called once when no further augmenting path exists."""
        ...


class RecordingReporter:
    """Accumulate every callback in memory."""

    def __init__(self) -> None:
        self.paths: List[AugmentingPath] = []
        self.total_flow: Optional[int] = None
        self.iterations: Optional[int] = None

    def on_augment(self, iteration: int, path: AugmentingPath) -> None:
        self.paths.append(path)

    def on_complete(self, total_flow: int, iterations: int) -> None:
        self.total_flow = total_flow
        self.iterations = iterations

    @property
    def completed(self) -> bool:
        return self.total_flow is not None


class LoggingReporter:
    """Emit each callback as a log record through the ekflow logger tree."""

    def __init__(
        self, name: str = "ekflow.reporting", level: int = logging.INFO
    ) -> None:
        self.logger = get_logger(name)
        self.level = level

    def on_augment(self, iteration: int, path: AugmentingPath) -> None:
        self.logger.log(
            self.level,
            "Augmentation %d: %s bottleneck=%d",
            iteration,
            " -> ".join(map(str, path.path_nodes)),
            path.bottleneck,
        )

    def on_complete(self, total_flow: int, iterations: int) -> None:
        self.logger.log(
            self.level,
            "Max flow %d reached after %d augmentation%s",
            total_flow,
            iterations,
            "" if iterations == 1 else "s",
        )
