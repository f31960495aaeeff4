"""
Dense binary trace: header codec, resampler, writer / reader and the trace pipeline.
"""
from mobsim.trace.header import HEADER_SIZE, TraceHeader
from mobsim.trace.reader import TraceReader
from mobsim.trace.resampler import TraceResampler
from mobsim.trace.writer import TraceWriter

__all__ = [
    "HEADER_SIZE",
    "TraceHeader",
    "TraceReader",
    "TraceResampler",
    "TraceWriter",
]
