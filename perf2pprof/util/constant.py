# coding=utf-8
"""
Copyright (c) Huawei Technologies Co., Ltd. 2020-2028. All rights reserved.
Description: constants shared by the perf script reader and the pprof encoder
FileName：constant.py
Create Date: 2026/10/18
Notes:

"""

SECOND_TO_US = 1_000_000
SECOND_TO_NS = 1_000_000_000
US_TO_NS = 1000

# string table entries every profile starts with, ids are their positions
PRESEEDED_STRINGS = ("", "samples", "count", "cpu", "nanoseconds")


class StringId:
    empty = 0
    samples = 1
    count = 2
    cpu = 3
    nanoseconds = 4


DEFAULT_INPUT = "-"
DEFAULT_OUTPUT = "cpu.pprof"
DEFAULT_PERF_BINARY = "perf"
DEFAULT_CONFIG_NAME = "perf2pprof_config.json"
CONFIG_PATH_ENV = "PERF2PPROF_CONFIG"
STDIO_PATH = "-"

# perf script prints `captured on    : Thu Mar 10 10:45:19 2022`
CAPTURED_ON_MARK = "captured on"
CAPTURED_ON_FORMATS = ("%c", "%a %b %d %H:%M:%S %Y")
# `sample_freq } = 997` inside the event attribute dump
SAMPLE_FREQ_PATTERN = r"sample_freq\s+}\s+=\s+(\d+)"
# `app 12345 1234.567890: 10101010 cpu-clock:`, perf script without a cpu column
EVENT_TIME_PATTERN = r"\S+\s+\d+\s+(\d+)\.(\d+)"
HEX_ADDRESS_PATTERN = r"[0-9a-fA-F]+"
MAX_ADDRESS = 2 ** 64 - 1
