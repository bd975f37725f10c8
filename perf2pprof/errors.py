# coding=utf-8
"""
Copyright (c) Huawei Technologies Co., Ltd. 2020-2028. All rights reserved.
Description: failures raised by the perf script to pprof conversion
FileName：errors.py
Create Date: 2026/10/18
Notes:

"""


class ConvertError(Exception):
    """Base class of every failure of one conversion."""


class PerfScriptError(ConvertError):
    """The perf script text is incomplete or malformed."""


class DurationNotFoundError(PerfScriptError):
    def __init__(self, message="can't find duration: fewer than two timestamped events"):
        super().__init__(message)


class CapturedTimeNotFoundError(PerfScriptError):
    def __init__(self, message="captured time isn't found in the header"):
        super().__init__(message)


class SampleFrequencyError(PerfScriptError):
    def __init__(self, message="sample_freq is missing or zero in the header"):
        super().__init__(message)


class EncodeError(ConvertError):
    """The profile message could not be serialized."""


class PerfCommandError(ConvertError):
    """Running `perf script` failed."""


class ConfigError(Exception):
    """The configuration file can't be read or is malformed."""
