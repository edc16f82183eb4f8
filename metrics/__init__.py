"""Draw frequency metrics."""

from .draw_frequency import DrawFrequencyAccumulator

__all__ = ["DrawFrequencyAccumulator"]
