from datetime import datetime, timedelta

DEFAULT_WIDTH = 1200.0


class TimeAxis:
    """Maps instants in [start, end] onto pixel offsets in [0, width]."""

    def __init__(self, start: datetime, end: datetime, width: float = DEFAULT_WIDTH):
        self.start = start
        self.end = end
        self.width = float(width)

    @property
    def span(self) -> timedelta:
        return self.end - self.start

    def time_to_x(self, moment: datetime) -> float:
        total = self.span.total_seconds()
        if total <= 0:
            return 0.0
        offset = (moment - self.start).total_seconds()
        return max(0.0, min(self.width, offset / total * self.width))

    def x_to_time(self, x: float) -> datetime:
        if self.width <= 0:
            return self.start
        ratio = max(0.0, min(1.0, x / self.width))
        return self.start + self.span * ratio

    def __repr__(self) -> str:
        return f"TimeAxis({self.start.isoformat()} .. {self.end.isoformat()}, width={self.width})"
