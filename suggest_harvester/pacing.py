"""Randomized delays that pace keystrokes and searches against the remote service."""

from __future__ import annotations

import random
import time
from typing import Callable, Dict, Mapping, Optional, Tuple

from .config import PacingConfig

KEYSTROKE = "keystroke"
KEYWORD = "keyword"


class PacingPolicy:
    """Map a call-site label to a delay sampled uniformly from ``[low, high)`` seconds.

    ``rng`` and ``wait`` (defaults: a fresh ``random.Random`` and ``time.sleep``)
    can be replaced to get deterministic or zero-length pauses.
    """

    def __init__(
        self,
        bounds: Mapping[str, Tuple[float, float]],
        *,
        rng: Optional[random.Random] = None,
        wait: Optional[Callable[[float], object]] = None,
    ) -> None:
        self._bounds: Dict[str, Tuple[float, float]] = dict(bounds)
        self._rng = rng or random.Random()
        self._wait = wait or time.sleep

    @classmethod
    def from_config(cls, conf: PacingConfig, **kwargs) -> "PacingPolicy":
        return cls(
            {
                KEYSTROKE: _ms_to_seconds(conf.keystroke_delay_ms),
                KEYWORD: _ms_to_seconds(conf.keyword_delay_ms),
            },
            **kwargs,
        )

    def delay_for(self, label: str) -> float:
        try:
            low, high = self._bounds[label]
        except KeyError:
            raise ValueError(f"No pacing bounds configured for '{label}'") from None
        return low + self._rng.random() * (high - low)

    def pause(self, label: str) -> float:
        """Block for a sampled delay and return it."""

        delay = self.delay_for(label)
        if delay > 0:
            self._wait(delay)
        return delay


def _ms_to_seconds(bounds: Tuple[float, float]) -> Tuple[float, float]:
    low, high = bounds
    return low / 1000.0, high / 1000.0
