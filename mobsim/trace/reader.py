# mobsim/trace/reader.py
from __future__ import annotations

from pathlib import Path
from typing import Tuple

import numpy as np

from mobsim import logs
from mobsim.trace.header import BODY_DTYPE, HEADER_SIZE, TraceHeader
from mobsim.utils.errors import TraceIOError
from mobsim.utils.filesystem import FileSystem


class TraceReader:
    """
    Reads traces produced by TraceWriter.

    Used by the post-write verification step and by ``mobsim inspect``.
    """

    @staticmethod
    def read_header(path: str | Path) -> TraceHeader:
        path = Path(path)
        try:
            with open(path, "rb") as f:
                data = f.read(HEADER_SIZE)
        except OSError as e:
            raise TraceIOError(f"[TraceReader] cannot open trace {path}: {e}") from e

        if len(data) < HEADER_SIZE:
            raise TraceIOError(
                f"[TraceReader] truncated header in {path}: {len(data)} of {HEADER_SIZE} bytes"
            )
        try:
            return TraceHeader.unpack(data)
        except ValueError as e:
            raise TraceIOError(f"[TraceReader] corrupt header in {path}: {e}") from e

    @classmethod
    def read_matrix(cls, path: str | Path) -> Tuple[TraceHeader, np.ndarray]:
        """
        Returns (header, matrix) with matrix.shape == header.shape.
        """
        path = Path(path)
        header = cls.read_header(path)

        try:
            with open(path, "rb") as f:
                f.seek(HEADER_SIZE)
                body = f.read()
        except OSError as e:
            raise TraceIOError(f"[TraceReader] cannot read trace {path}: {e}") from e

        if len(body) != header.body_size:
            raise TraceIOError(
                f"[TraceReader] body of {path} is {len(body)} bytes, header expects {header.body_size}"
            )

        matrix = np.frombuffer(body, dtype=BODY_DTYPE).reshape(header.shape).astype(np.float64)
        return header, matrix

    @classmethod
    def verify(cls, path: str | Path, expected: TraceHeader) -> TraceHeader:
        """
        Re-read the header and check the file size after a write.
        """
        path = Path(path)
        header = cls.read_header(path)

        if header != expected:
            raise TraceIOError(f"[TraceReader] header mismatch in {path}: {header} != {expected}")

        size = FileSystem.get_file_size(path)
        if size != expected.file_size:
            raise TraceIOError(
                f"[TraceReader] {path} is {size} bytes, expected {expected.file_size}"
            )

        logs.debug(f"[TraceReader] verified {path.name} ({FileSystem.format_size(size)})")
        return header
