# mobsim/trace/header.py
from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Tuple

# little-endian: int32 nodeCount, int32 durationSteps, float64 x4 MBR
HEADER_FORMAT = "<ii4d"
HEADER_SIZE = struct.calcsize(HEADER_FORMAT)  # 40

# one matrix cell: float64 x, float64 y
CELL_SIZE = struct.calcsize("<2d")  # 16

BODY_DTYPE = "<f8"

_INT32_MAX = 2**31 - 1


@dataclass(frozen=True)
class TraceHeader:
    """
    Fixed-size header of a dense binary trace.

    The MBR is always the full simulation square [0, size] x [0, size].
    """

    node_count: int
    duration_steps: int
    mbr_min_x: float = 0.0
    mbr_min_y: float = 0.0
    mbr_max_x: float = 0.0
    mbr_max_y: float = 0.0

    def __post_init__(self):
        for name in ("node_count", "duration_steps"):
            value = getattr(self, name)
            if not 0 <= value <= _INT32_MAX:
                raise ValueError(f"[TraceHeader] {name} out of int32 range: {value}")

    @classmethod
    def for_area(cls, node_count: int, duration_steps: int, size: float) -> "TraceHeader":
        return cls(
            node_count=int(node_count),
            duration_steps=int(duration_steps),
            mbr_min_x=0.0,
            mbr_min_y=0.0,
            mbr_max_x=float(size),
            mbr_max_y=float(size),
        )

    # --------------------------------------------------
    # layout
    # --------------------------------------------------
    @property
    def shape(self) -> Tuple[int, int, int]:
        """Matrix shape: (duration_steps, node_count, 2)."""
        return self.duration_steps, self.node_count, 2

    @property
    def body_size(self) -> int:
        return self.duration_steps * self.node_count * CELL_SIZE

    @property
    def file_size(self) -> int:
        return HEADER_SIZE + self.body_size

    # --------------------------------------------------
    # codec
    # --------------------------------------------------
    def pack(self) -> bytes:
        return struct.pack(
            HEADER_FORMAT,
            self.node_count,
            self.duration_steps,
            self.mbr_min_x,
            self.mbr_min_y,
            self.mbr_max_x,
            self.mbr_max_y,
        )

    @classmethod
    def unpack(cls, data: bytes) -> "TraceHeader":
        if len(data) < HEADER_SIZE:
            raise ValueError(f"[TraceHeader] need {HEADER_SIZE} bytes, got {len(data)}")
        node_count, duration_steps, min_x, min_y, max_x, max_y = struct.unpack(
            HEADER_FORMAT, data[:HEADER_SIZE]
        )
        return cls(node_count, duration_steps, min_x, min_y, max_x, max_y)
