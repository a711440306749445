from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence

from .node import Geometry, union


@dataclass(frozen=True)
class Repetition:
    """``count`` copies of ``geometry`` placed at ``start + i * step``.

    Iterating yields the placed copies lazily; the object can be iterated
    any number of times and always produces the same sequence.
    """

    geometry: Geometry
    count: int
    step: tuple[float, float, float]
    start: tuple[float, float, float] = (0.0, 0.0, 0.0)

    def __post_init__(self) -> None:
        if int(self.count) < 1:
            raise ValueError("count must be >= 1.")
        object.__setattr__(self, "count", int(self.count))
        object.__setattr__(self, "step", _vec3(self.step))
        object.__setattr__(self, "start", _vec3(self.start))

    def __len__(self) -> int:
        return self.count

    def offsets(self) -> list[tuple[float, float, float]]:
        sx, sy, sz = self.start
        dx, dy, dz = self.step
        return [(sx + i * dx, sy + i * dy, sz + i * dz) for i in range(self.count)]

    def __iter__(self) -> Iterator[Geometry]:
        for offset in self.offsets():
            yield self.geometry.translated(*offset)

    def combined(self) -> Geometry:
        return union(*self)


def _vec3(value: Sequence[float]) -> tuple[float, float, float]:
    x, y, z = (float(v) for v in value)
    return (x, y, z)


def repeat(
    geometry: Geometry,
    count: int,
    step: Sequence[float],
    start: Sequence[float] = (0.0, 0.0, 0.0),
) -> Repetition:
    return Repetition(geometry=geometry, count=count, step=tuple(step), start=tuple(start))


__all__ = ["Repetition", "repeat"]
