"""Configuration classes for ekflow components."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class EngineConfig:
    """Configuration for the Edmonds-Karp engine."""

    # Stop the breadth-first search as soon as the sink is labelled
    stop_at_sink: bool = True

    # Index edges by (u, v) so residual lookups are O(1) instead of a scan
    index_edges: bool = False

    # Upper bound on augmentations per run; None means run to completion
    max_iterations: Optional[int] = None

    def __post_init__(self) -> None:
        if self.max_iterations is not None and self.max_iterations < 0:
            raise ValueError("max_iterations must be non-negative or None")


@dataclass(frozen=True)
class ParserConfig:
    """Configuration for the plain-text network parser."""

    # Raise on the first malformed edge line instead of skipping it
    strict: bool = False

    # Comment marker; text after it on a line is ignored
    comment_prefix: str = "#"


# Global configuration instances
DEFAULT_ENGINE_CONFIG = EngineConfig()
DEFAULT_PARSER_CONFIG = ParserConfig()
