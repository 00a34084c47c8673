from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator


@dataclass(frozen=True)
class Point:
    x: int
    y: int

    def distance_to(self, other: "Point") -> float:
        dx = other.x - self.x
        dy = other.y - self.y
        return float((dx * dx + dy * dy) ** 0.5)


@dataclass
class CapturedPoint:
    point: Point
    drawn: bool = False


@dataclass
class Segment:
    """One pointer-down to pointer-up gesture; append-only, chronological."""

    points: list[CapturedPoint] = field(default_factory=list)

    def append(self, point: Point) -> CapturedPoint:
        captured = CapturedPoint(point=point)
        self.points.append(captured)
        return captured

    def last_point(self) -> Point | None:
        if not self.points:
            return None
        return self.points[-1].point

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[CapturedPoint]:
        return iter(self.points)


class SegmentStore:
    """Ordered stroke history. Segments are never evicted."""

    def __init__(self) -> None:
        self._segments: list[Segment] = []

    def begin_segment(self, point: Point) -> Segment:
        segment = Segment()
        segment.append(point)
        self._segments.append(segment)
        return segment

    def add_point(self, point: Point) -> CapturedPoint:
        if not self._segments:
            return self.begin_segment(point).points[0]
        return self._segments[-1].append(point)

    def current_segment(self) -> Segment | None:
        if not self._segments:
            return None
        return self._segments[-1]

    def point_count(self) -> int:
        return sum(len(segment) for segment in self._segments)

    def undrawn_count(self) -> int:
        return sum(1 for segment in self._segments for captured in segment if not captured.drawn)

    def mark_all_undrawn(self) -> int:
        reset = 0
        for segment in self._segments:
            for captured in segment:
                if captured.drawn:
                    captured.drawn = False
                    reset += 1
        return reset

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._segments)

    def __getitem__(self, index: int) -> Segment:
        return self._segments[index]
