from __future__ import annotations

from dataclasses import dataclass


Color = tuple[int, int, int, int]


@dataclass(frozen=True)
class StrokeStyle:
    color: Color
    width: int = 1

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValueError("stroke width must be > 0")
