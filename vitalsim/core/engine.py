import logging
import math
from datetime import datetime, timedelta
from typing import Callable, List, Optional

import numpy as np

from .enums import SchedulerPhase, TrackedMetric
from .history import HistoryStore
from .state import CurrentVitals, EngineConfig, Snapshot, VitalSample
from vitalsim.physiology.derived import compute_map
from vitalsim.physiology.generator import VitalGenerator

logger = logging.getLogger(__name__)

SnapshotCallback = Callable[[Snapshot], None]

# Tolerance when comparing accumulated float time against the tick interval.
_TIME_EPSILON = 1e-9


class VitalsEngine:
    """
    Update scheduler for the simulated vitals feed.

    Owns the current vitals and the rolling histories and is their only
    mutator. Each cycle runs generate -> derive MAP -> append histories, and
    the result is pushed to subscribers as one immutable Snapshot.

    Phases:
    - SEEDING: start() runs `history_capacity` cycles back to back so the
      charts begin full, then publishes a single snapshot tagged SEEDING.
    - STEADY: one cycle per tick, every `tick_interval` seconds of time fed
      through advance(), until stop().

    Sample timestamps come from simulated time anchored so the seeded history
    ends at the wall-clock instant the engine was created. They strictly
    increase from one cycle to the next.
    """
    def __init__(self, config: Optional[EngineConfig] = None,
                 rng: Optional[np.random.Generator] = None,
                 clock: Callable[[], datetime] = datetime.now):
        self.config = config or EngineConfig()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.rng_seed)

        self.generator = VitalGenerator(
            self.config.ranges,
            self.rng,
            self.config.anomaly_numerator,
            self.config.anomaly_denominator,
        )
        self.history = HistoryStore(self.config.history_capacity)

        self.phase = SchedulerPhase.SEEDING
        self.vitals: Optional[CurrentVitals] = None
        self.tick_count = 0
        self.time = 0.0  # Simulated seconds since origin

        seed_span = self.config.history_capacity * self.config.tick_interval
        self._origin = clock() - timedelta(seconds=seed_span)

        self.running = False
        self._accumulator = 0.0
        self._in_tick = False
        self._latest: Optional[Snapshot] = None
        self._subscribers: List[SnapshotCallback] = []

    # Subscribers.

    def subscribe(self, callback: SnapshotCallback) -> SnapshotCallback:
        """Register a callback for every published snapshot."""
        if callback not in self._subscribers:
            self._subscribers.append(callback)
        return callback

    def unsubscribe(self, callback: SnapshotCallback):
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def _publish(self, snapshot: Snapshot):
        """
        Deliver to every subscriber, even if an earlier one raises.

        The first subscriber error is re-raised once all subscribers have
        seen the snapshot. Later errors are only logged.
        """
        self._latest = snapshot
        first_error: Optional[Exception] = None
        for callback in list(self._subscribers):
            try:
                callback(snapshot)
            except Exception as e:
                logger.exception("Snapshot subscriber %r failed on tick %d", callback, snapshot.tick)
                if first_error is None:
                    first_error = e
        if first_error is not None:
            raise first_error

    def get_latest_snapshot(self) -> Optional[Snapshot]:
        """Most recently published snapshot (None before start)."""
        return self._latest

    # Lifecycle.

    def start(self) -> Snapshot:
        """Seed histories if needed and begin accepting clock time."""
        if self.phase is SchedulerPhase.SEEDING:
            self.seed()
        self.running = True
        logger.info(
            "Vitals engine running (tick every %.2fs, anomaly odds %.2f)",
            self.config.tick_interval, self.config.anomaly_probability,
        )
        return self._latest

    def stop(self):
        """Stop scheduling further ticks."""
        self.running = False
        self._accumulator = 0.0
        logger.info("Vitals engine stopped after %d ticks", self.tick_count)

    def seed(self) -> Snapshot:
        if self.phase is not SchedulerPhase.SEEDING:
            return self._latest

        self._in_tick = True
        try:
            for _ in range(self.config.history_capacity):
                self._cycle()
            self.phase = SchedulerPhase.STEADY
            logger.info("Seeded %d samples per history", self.config.history_capacity)
            self._publish(self._build_snapshot(SchedulerPhase.SEEDING))
        finally:
            self._in_tick = False
        return self._latest

    # Ticking.

    def _cycle(self):
        vitals = self.generator.generate()
        mean_pressure = compute_map(vitals.systolic, vitals.diastolic)

        self.tick_count += 1
        self.time += self.config.tick_interval
        stamp = self._origin + timedelta(seconds=self.time)

        self.history.append(TrackedMetric.HEART_RATE, VitalSample(stamp, vitals.heart_rate))
        self.history.append(TrackedMetric.SPO2, VitalSample(stamp, vitals.spo2))
        self.history.append(TrackedMetric.MEAN_ARTERIAL_PRESSURE, VitalSample(stamp, mean_pressure))
        self.vitals = vitals

    def _build_snapshot(self, phase: SchedulerPhase) -> Snapshot:
        v = self.vitals
        return Snapshot(
            tick=self.tick_count,
            time=self.time,
            timestamp=self._origin + timedelta(seconds=self.time),
            phase=phase,
            heart_rate=v.heart_rate,
            spo2=v.spo2,
            systolic_bp=v.systolic,
            diastolic_bp=v.diastolic,
            temperature=v.temperature,
            heart_rate_history=self.history.snapshot(TrackedMetric.HEART_RATE),
            spo2_history=self.history.snapshot(TrackedMetric.SPO2),
            map_history=self.history.snapshot(TrackedMetric.MEAN_ARTERIAL_PRESSURE),
        )

    def tick(self) -> Snapshot:
        """Run one steady-state cycle and publish its snapshot."""
        if self.phase is SchedulerPhase.SEEDING:
            raise RuntimeError("Engine must be seeded before ticking; call start() first")
        if self._in_tick:
            raise RuntimeError("Tick already in progress; ticks cannot overlap")

        self._in_tick = True
        try:
            self._cycle()
            snapshot = self._build_snapshot(SchedulerPhase.STEADY)
            logger.debug(
                "Tick %d: HR %.0f SpO2 %.0f BP %.0f/%.0f T %.1f",
                snapshot.tick, snapshot.heart_rate, snapshot.spo2,
                snapshot.systolic_bp, snapshot.diastolic_bp, snapshot.temperature,
            )
            self._publish(snapshot)
        finally:
            self._in_tick = False
        return snapshot

    def advance(self, dt: float) -> List[Snapshot]:
        """
        Feed dt seconds of clock time; tick once per full interval elapsed.

        Returns the snapshots published during this call.
        """
        if not self.running or not math.isfinite(dt) or dt <= 0:
            return []

        published = []
        self._accumulator += dt
        interval = self.config.tick_interval
        while self.running and self._accumulator + _TIME_EPSILON >= interval:
            self._accumulator -= interval
            published.append(self.tick())
        return published
