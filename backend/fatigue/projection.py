"""Advisory next-week fatigue projections.

Projections are forward-looking estimates shown next to a fatigue score.
They never feed the weighted factor computation or violation detection.
"""

import random
from enum import Enum
from typing import Optional, Protocol

from .types import FatigueMetrics, FatigueRuleConfig


class ProjectorType(str, Enum):
    """Available projection estimators."""
    LINEAR_DECAY = "linear_decay"
    RANDOM_DECAY = "random_decay"


class ScoreProjector(Protocol):
    """Protocol for estimators of next week's fatigue score."""

    name: str

    def project(
        self,
        current_score: int,
        metrics: FatigueMetrics,
        rules: FatigueRuleConfig,
    ) -> int:
        """
        Estimate next week's score.

        Args:
            current_score: The score just calculated
            metrics: Raw metrics behind the score
            rules: Rule set the score was calculated against

        Returns:
            Projected score clamped to 0-100
        """
        ...


def _clamp(score: float) -> int:
    return int(max(0, min(100, score)))


class LinearDecayProjector:
    """Deterministic estimate: a fixed recovery over the coming week."""

    name = ProjectorType.LINEAR_DECAY.value

    def __init__(self, decay_points: int = 7):
        self.decay_points = decay_points

    def project(self, current_score: int, metrics: FatigueMetrics, rules: FatigueRuleConfig) -> int:
        return _clamp(current_score - self.decay_points)


class RandomDecayProjector:
    """Legacy estimate: a random 0-14 point recovery. Pass a seeded rng for repeatable output."""

    name = ProjectorType.RANDOM_DECAY.value

    def __init__(self, rng: Optional[random.Random] = None, max_decay: int = 15):
        self.rng = rng or random.Random()
        self.max_decay = max_decay

    def project(self, current_score: int, metrics: FatigueMetrics, rules: FatigueRuleConfig) -> int:
        return _clamp(current_score - self.rng.randrange(self.max_decay))


def create_projector(projector_type: ProjectorType | str, seed: Optional[int] = None) -> ScoreProjector:
    """
    Factory function to create a projector instance.

    Raises:
        ValueError: If projector_type is not recognized
    """
    if isinstance(projector_type, str):
        projector_type = ProjectorType(projector_type.lower())

    if projector_type == ProjectorType.LINEAR_DECAY:
        return LinearDecayProjector()
    elif projector_type == ProjectorType.RANDOM_DECAY:
        return RandomDecayProjector(random.Random(seed))
    else:
        raise ValueError(f"Unknown projector type: {projector_type}")
