# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Simulation clock driver.

Converts elapsed real time into simulated time with a time scale
(simulated seconds per real second), and feeds the engine one frame at
a time. Start / pause / continue / reset / seek follow the interactive
controls of the simulator:

    start()   restarts at 0, or continues when paused
    pause()   freezes simulated time
    reset()   stops and rewinds to 0
    seek(t)   jumps to t (clamped to the horizon)

The clock stops by itself when simulated time reaches the horizon.
"""
import math
from typing import Sequence

from .bodies import BeaconConfig, OrbitalBody
from .engine import CoverageEngine
from .orbital_mechanics import OrbitalConstants
from .statistics import StatsSnapshot


MIN_TIME_SCALE = 1.0
MAX_TIME_SCALE = 10_800.0
DEFAULT_TIME_SCALE = 10_800.0


class SimulationClock:
    """Simulated-time source for one run."""

    def __init__(
        self,
        horizon_s: float = OrbitalConstants.SECONDS_PER_DAY,
        time_scale: float = DEFAULT_TIME_SCALE,
    ) -> None:
        self.horizon_s = horizon_s
        self.time_s = 0.0
        self.running = False
        self.paused = False
        self.time_scale = DEFAULT_TIME_SCALE
        self.set_time_scale(time_scale)

    @property
    def finished(self) -> bool:
        return self.time_s >= self.horizon_s

    @property
    def stopped(self) -> bool:
        """Neither running nor paused; a paused clock is not stopped."""
        return not self.running and not self.paused

    def set_time_scale(self, time_scale: float) -> None:
        if not MIN_TIME_SCALE <= time_scale <= MAX_TIME_SCALE:
            raise ValueError(
                f"Time scale must be in [{MIN_TIME_SCALE:.0f}, {MAX_TIME_SCALE:.0f}], "
                f"got {time_scale}"
            )
        self.time_scale = float(time_scale)

    def start(self) -> None:
        if not self.paused:
            self.time_s = 0.0
        self.running = True
        self.paused = False

    def pause(self) -> None:
        self.paused = True
        self.running = False

    def reset(self) -> None:
        self.running = False
        self.paused = False
        self.time_s = 0.0

    def seek(self, t: float) -> float:
        self.time_s = min(max(t, 0.0), self.horizon_s)
        return self.time_s

    def tick(self, real_elapsed_s: float) -> float:
        """
        Advance by one frame of real time.

        Returns:
            Simulated time after the frame. Unchanged while not running.
        """
        if not self.running:
            return self.time_s
        if real_elapsed_s < 0 or not math.isfinite(real_elapsed_s):
            raise ValueError(f"Elapsed time must be non-negative, got {real_elapsed_s}")

        self.time_s = min(self.time_s + real_elapsed_s * self.time_scale, self.horizon_s)
        if self.time_s >= self.horizon_s:
            self.running = False
            self.paused = False
        return self.time_s


def drive(
    engine: CoverageEngine,
    clock: SimulationClock,
    beacons: Sequence[BeaconConfig],
    catalog: Sequence[OrbitalBody],
    frame_s: float = 1.0 / 60.0,
) -> StatsSnapshot:
    """
    Run the clock to the horizon, advancing the engine every frame.

    Starts the clock if it is idle. The final frame is advanced with
    is_running=False so open intervals are closed.

    Returns:
        Snapshot after the last frame.
    """
    if frame_s <= 0:
        raise ValueError(f"Frame duration must be positive, got {frame_s}")
    if not clock.running:
        clock.start()

    snapshot = engine.advance(beacons, catalog, clock.time_s, is_running=True)
    while clock.running:
        t = clock.tick(frame_s)
        snapshot = engine.advance(beacons, catalog, t, is_running=not clock.stopped)
    return snapshot


def format_clock(t: float) -> str:
    """Simulated seconds as HH:MM:SS."""
    h = int(t // 3600)
    m = int((t % 3600) // 60)
    s = int(t % 60)
    return f"{h:02d}:{m:02d}:{s:02d}"


def format_time_scale(time_scale: float) -> str:
    """Human-readable time scale, e.g. '3.0 hours/s'."""
    if time_scale >= 3600:
        return f"{time_scale / 3600:.1f} hours/s"
    if time_scale >= 60:
        return f"{time_scale / 60:.1f} mins/s"
    return f"{time_scale:.1f} secs/s"


def format_lst(hours: float) -> str:
    """Local solar time in hours as HH:MM."""
    h = int(math.floor(hours))
    m = int(math.floor((hours - h) * 60))
    return f"{h:02d}:{m:02d}"
