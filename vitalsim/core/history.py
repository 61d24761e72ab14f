from collections import deque
from typing import Deque, Dict, Tuple

from .constants import DEFAULT_HISTORY_CAPACITY
from .enums import TrackedMetric
from .errors import ConfigurationError
from .state import VitalSample


class HistoryStore:
    """
    Fixed-capacity rolling history per tracked metric.

    Appending past capacity drops the oldest sample (FIFO), so each buffer
    always holds the most recent `capacity` samples in insertion order.
    """
    def __init__(self, capacity: int = DEFAULT_HISTORY_CAPACITY):
        if capacity <= 0:
            raise ConfigurationError(f"History capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._buffers: Dict[TrackedMetric, Deque[VitalSample]] = {
            metric: deque(maxlen=capacity) for metric in TrackedMetric
        }

    def __getitem__(self, metric: TrackedMetric) -> Deque[VitalSample]:
        return self._buffers[metric]

    def append(self, metric: TrackedMetric, sample: VitalSample):
        # deque(maxlen) evicts from the left on overflow.
        self._buffers[metric].append(sample)

    def snapshot(self, metric: TrackedMetric) -> Tuple[VitalSample, ...]:
        """Copy of the buffer contents, oldest first."""
        return tuple(self._buffers[metric])
