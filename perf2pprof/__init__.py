# coding=utf-8
from perf2pprof.converter import convert, convert_file
from perf2pprof.errors import CapturedTimeNotFoundError, ConvertError, DurationNotFoundError, EncodeError, \
    PerfScriptError, SampleFrequencyError

__version__ = "1.0.0"
