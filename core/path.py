#!/usr/bin/env python3
"""
Path Module
Spline-based animation paths for cameras, lights and meshes.

A path is an ordered list of sections. Each section stores the time (seconds)
needed to travel from the previous anchor to the section's position. The
owning scene object advances the path once per tick with update(dt) and then
samples get_position() or get_look_at().

Position paths start at an implicit origin anchor. If the last section ends
at the origin the path is circular and the spline wraps around; otherwise it
is clamped and flattens at both ends. Look-at paths always wrap.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .errors import InvalidPathSection


ORIGIN = (0.0, 0.0, 0.0)


@dataclass(frozen=True)
class PathSection:
    """Single path section

    Attributes:
        time: Seconds to travel from the previous anchor to this position (> 0)
        position: [x, y, z] destination of this section, before scaling
    """
    time: float
    position: Tuple[float, float, float]


def _wrap(index: int, count: int) -> int:
    """Signed modulo: maps any index into [0, count)"""
    return index % count


def _bezier(pre_left, left, right, post_right, t: float) -> np.ndarray:
    """Evaluate the Catmull-Rom segment between left and right as a cubic Bezier

    Args:
        pre_left: Anchor before left
        left: Start anchor (t = 0)
        right: End anchor (t = 1)
        post_right: Anchor after right
        t: Segment parameter in [0, 1]

    Returns:
        np.ndarray: Point on the curve
    """
    cp1 = left + (right - pre_left) / 6.0
    cp2 = right + (left - post_right) / 6.0

    s = 1.0 - t
    return (s * s * s) * left + (3.0 * t * s * s) * cp1 + (3.0 * t * t * s) * cp2 + (t * t * t) * right


class Path:
    """Animation path evaluated with a Catmull-Rom spline

    The section list and scale are fixed after construction. Only the cursor
    (current section and time elapsed inside it) changes through update().
    A path without sections is static and always evaluates to the origin.

    Instances are not thread-safe: call update() and the getters for one
    path from a single owner.
    """

    def __init__(self, sections: Optional[Sequence[PathSection]] = None, scale: float = 1.0):
        """Create a path

        Args:
            sections: Ordered path sections (None or empty for a static path)
            scale: Uniform factor applied to every section position
        """
        self._sections: List[PathSection] = list(sections) if sections else []
        self._scale = scale
        self._circular = bool(self._sections) and tuple(self._sections[-1].position) == ORIGIN
        self._lap_time = sum(s.time for s in self._sections)

        self.current_section_index = 0
        self.elapsed_in_section = 0.0

    def __repr__(self):
        return f"Path(sections={self._sections!r}, scale={self._scale!r})"

    def get_sections(self) -> List[PathSection]:
        return self._sections

    def get_scale(self) -> float:
        return self._scale

    def is_static(self) -> bool:
        """True if the path has no sections and therefore never moves"""
        return not self._sections

    def is_circular(self) -> bool:
        """True if the last section returns to the origin, closing the loop"""
        return self._circular

    def verify(self):
        """Check that every section has a positive travel time

        Raises:
            InvalidPathSection: For the first section with time <= 0
        """
        for i, section in enumerate(self._sections):
            if not section.time > 0:
                raise InvalidPathSection(i, section.time)

    def update(self, dt: float):
        """Advance the path cursor

        The cursor loops through the section list indefinitely, independent
        of whether the path is circular. A section is left once the elapsed
        time reaches (>=) its duration.

        Args:
            dt: Elapsed time in seconds since the last update
        """
        if not self._sections:
            return

        self.elapsed_in_section += dt

        # full laps bring the cursor back to the same section
        if self._lap_time > 0 and self.elapsed_in_section >= self._lap_time:
            self.elapsed_in_section %= self._lap_time

        count = len(self._sections)
        for _ in range(count):
            duration = self._sections[self.current_section_index].time
            if self.elapsed_in_section < duration:
                break
            self.elapsed_in_section -= duration
            self.current_section_index = (self.current_section_index + 1) % count

    def get_position(self) -> np.ndarray:
        """Interpolated position at the current cursor, scale applied

        Returns:
            np.ndarray: [x, y, z]
        """
        count = len(self._sections)
        if count == 0:
            return np.zeros(3)

        t = self._section_fraction()
        if count == 1:
            return self._scaled(0) * t

        cur = self.current_section_index
        return _bezier(
            self._get_point(cur - 1),
            self._get_point(cur),
            self._get_point(cur + 1),
            self._get_point(cur + 2),
            t,
        )

    def get_look_at(self) -> np.ndarray:
        """Interpolated look-at target at the current cursor

        Look-at paths have no origin anchor and always wrap around.
        A single-section path is a fixed (unscaled) target.

        Returns:
            np.ndarray: [x, y, z]
        """
        count = len(self._sections)
        if count == 0:
            return np.zeros(3)
        if count == 1:
            return np.asarray(self._sections[0].position, dtype=np.float64)

        cur = self.current_section_index
        return _bezier(
            self._get_look_at_point(cur - 2),
            self._get_look_at_point(cur - 1),
            self._get_look_at_point(cur),
            self._get_look_at_point(cur + 1),
            self._section_fraction(),
        )

    def _section_fraction(self) -> float:
        duration = self._sections[self.current_section_index].time
        if duration <= 0:
            # unverified data; verify() reports it
            return 0.0
        return self.elapsed_in_section / duration

    def _scaled(self, section_index: int) -> np.ndarray:
        return np.asarray(self._sections[section_index].position, dtype=np.float64) * self._scale

    def _get_point(self, index: int) -> np.ndarray:
        """Position anchor. Anchor 0 is the start point, anchor k ends section k-1"""
        count = len(self._sections)
        if self._circular:
            # last section sits on the origin and doubles as anchor 0
            return self._scaled(_wrap(index - 1, count))

        if index <= 0:
            return np.zeros(3)
        if index >= count:
            return self._scaled(count - 1)
        return self._scaled(index - 1)

    def _get_look_at_point(self, index: int) -> np.ndarray:
        return self._scaled(_wrap(index, len(self._sections)))
