# mobsim/trace/writer.py
from __future__ import annotations

from pathlib import Path

import numpy as np

from mobsim import logs
from mobsim.trace.header import BODY_DTYPE, TraceHeader
from mobsim.utils.errors import TraceIOError
from mobsim.utils.filesystem import FileSystem


class TraceWriter:
    """
    TraceWriter (FINAL)

    Writes header + matrix as one sequential little-endian stream:

        [header][t=0: n0.x n0.y n1.x n1.y ...][t=1: ...]...

    Rules:
      - the matrix shape must equal header.shape, checked before the file is touched
      - an existing file is never replaced unless overwrite=True
      - the stream is always closed; OS failures surface as TraceIOError
      - a failed write leaves the partial file in place for the caller
    """

    def __init__(self, *, overwrite: bool = False) -> None:
        self.overwrite = overwrite

    @staticmethod
    def encode_body(matrix: np.ndarray) -> bytes:
        # C order of (t, n, xy) is exactly the on-disk order
        return np.ascontiguousarray(matrix, dtype=BODY_DTYPE).tobytes()

    def write(self, path: str | Path, header: TraceHeader, matrix: np.ndarray) -> int:
        path = Path(path)
        matrix = np.asarray(matrix, dtype=np.float64)

        if matrix.shape != header.shape:
            raise ValueError(
                f"[TraceWriter] matrix shape {matrix.shape} does not match header {header.shape}"
            )

        head = header.pack()
        body = self.encode_body(matrix)
        mode = "wb" if self.overwrite else "xb"

        written = 0
        try:
            FileSystem.ensure_dir(path.parent)
            with open(path, mode) as f:
                written += f.write(head)
                written += f.write(body)
        except OSError as e:
            raise TraceIOError(f"[TraceWriter] cannot write trace {path}: {e}") from e

        logs.info(
            f"[TraceWriter] wrote {path.name} "
            f"nodes={header.node_count} steps={header.duration_steps} "
            f"size={FileSystem.format_size(written)}"
        )
        return written
