"""Best time to run.

Scores every hour of a forecast with the running score engine and picks the
best hour per calendar day, restricted to the hours the runner is willing to
run (by default 4:00 to 20:00, end exclusive).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable

from run_conditions.models.profile import ActivityKind
from run_conditions.models.recommendation import BestRunTimes, RunTimeCandidate
from run_conditions.models.weather import WeatherSample
from run_conditions.scoring.engine import compute_running_score

logger = logging.getLogger(__name__)

DEFAULT_RUN_HOURS_START = 4
DEFAULT_RUN_HOURS_END = 20


@dataclass
class BestRunTimeFinder:
    """Finds the best hour to run on each day of a forecast.

    Example:
        ```python
        finder = BestRunTimeFinder(run_hours_start=6, run_hours_end=21)
        best = finder.find(hourly_samples, ActivityKind.LONG_RUN)
        for day, slot in best.by_day.items():
            print(day, slot.time.hour, slot.score)
        ```
    """

    run_hours_start: int = DEFAULT_RUN_HOURS_START
    run_hours_end: int = DEFAULT_RUN_HOURS_END

    def in_run_hours(self, time: datetime) -> bool:
        return self.run_hours_start <= time.hour < self.run_hours_end

    def candidates(
        self,
        samples: Iterable[WeatherSample],
        activity: ActivityKind = ActivityKind.EASY,
        after: datetime | None = None,
    ) -> list[RunTimeCandidate]:
        """Score every timed sample inside run hours.

        Samples without a time, before ``after``, or whose score is not a
        number are skipped.
        """
        found: list[RunTimeCandidate] = []
        for sample in samples:
            if sample.time is None or not self.in_run_hours(sample.time):
                continue
            if after is not None and sample.time < after:
                continue

            score = compute_running_score(sample, activity)
            if not math.isfinite(score):
                continue

            found.append(
                RunTimeCandidate(
                    time=sample.time,
                    score=score,
                    apparent_f=sample.apparent_f,
                    wind_mph=sample.wind_mph,
                    precip_prob=sample.precip_prob,
                    uv_index=sample.uv_index,
                )
            )
        return found

    def find(
        self,
        samples: Iterable[WeatherSample],
        activity: ActivityKind = ActivityKind.EASY,
        after: datetime | None = None,
    ) -> BestRunTimes:
        """Best hour per day plus all candidates ranked best first.

        Ties go to the earlier hour.
        """
        candidates = self.candidates(samples, activity, after)
        ranked = sorted(candidates, key=lambda c: (-c.score, c.time))

        by_day: dict[date, RunTimeCandidate] = {}
        for candidate in ranked:
            by_day.setdefault(candidate.time.date(), candidate)

        logger.debug(
            f"Scored {len(candidates)} run-hour candidates across {len(by_day)} day(s)"
        )
        return BestRunTimes(by_day=dict(sorted(by_day.items())), ranked=ranked)


def find_best_run_times(
    samples: Iterable[WeatherSample],
    activity: ActivityKind = ActivityKind.EASY,
    run_hours_start: int = DEFAULT_RUN_HOURS_START,
    run_hours_end: int = DEFAULT_RUN_HOURS_END,
) -> BestRunTimes:
    """Convenience function around ``BestRunTimeFinder``."""
    finder = BestRunTimeFinder(run_hours_start=run_hours_start, run_hours_end=run_hours_end)
    return finder.find(samples, activity)
