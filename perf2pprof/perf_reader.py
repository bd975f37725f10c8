# coding=utf-8
"""
Copyright (c) Huawei Technologies Co., Ltd. 2020-2028. All rights reserved.
Description: reads `perf script --header` text into aggregated call stacks
FileName：perf_reader.py
Create Date: 2026/10/18
Notes:
    input layout, one block per sample, blocks separated by a blank line:

        # captured on    : Thu Mar 10 10:45:19 2022
        # ... sample_freq } = 997 ...
        app 12345 1234.567890: 10101010 cpu-clock:
                    55d0c3a1b2c3 main+0x13 (/bin/app)
                    7f1a2b3c4d5e __libc_start_main+0xf3 (/usr/lib/libc.so.6)

"""
import re
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional, Tuple, Union

from perf2pprof.errors import CapturedTimeNotFoundError, DurationNotFoundError, SampleFrequencyError
from perf2pprof.util.constant import CAPTURED_ON_FORMATS, CAPTURED_ON_MARK, EVENT_TIME_PATTERN, \
    HEX_ADDRESS_PATTERN, MAX_ADDRESS, SAMPLE_FREQ_PATTERN, SECOND_TO_US, US_TO_NS
from perf2pprof.util.logging_utils import get_default_logger

logger = get_default_logger(__name__)

__all__ = ['Frame', 'PerfData', 'PerfReader', 'read_perf_script']

EVENT_TIME_RE = re.compile(EVENT_TIME_PATTERN)
SAMPLE_FREQ_RE = re.compile(SAMPLE_FREQ_PATTERN)
HEX_ADDRESS_RE = re.compile(HEX_ADDRESS_PATTERN)


@dataclass(frozen=True)
class Frame:
    """One entry of a sampled call stack."""
    address: int
    function_name: str
    module_name: str


Stack = Tuple[Frame, ...]


@dataclass
class PerfData:
    """Aggregated stacks and capture metadata of one perf script dump."""
    samples: Dict[Stack, int]
    captured_time: datetime
    duration: timedelta
    frequency: int
    skipped_frames: List[Tuple[int, str]] = field(default_factory=list)

    @property
    def duration_nanos(self) -> int:
        # timedelta keeps whole microseconds, no rounding involved
        return (self.duration // timedelta(microseconds=1)) * US_TO_NS

    @property
    def total_samples(self) -> int:
        return sum(self.samples.values())


def parse_event_time(line: str) -> Optional[int]:
    """Return the timestamp of an event line in microseconds, None if absent."""
    match = EVENT_TIME_RE.search(line)
    if not match:
        return None
    seconds, fraction = match.groups()
    usec = int(fraction[:6].ljust(6, "0"))
    return int(seconds) * SECOND_TO_US + usec


def parse_frame(line: str) -> Optional[Frame]:
    """Parse a trimmed `<hex address> <function> <module>` line, None when malformed."""
    parts = line.split(None, 1)
    if len(parts) != 2 or not HEX_ADDRESS_RE.fullmatch(parts[0]):
        return None
    address = int(parts[0], 16)
    if address > MAX_ADDRESS:
        return None

    rest = parts[1].rsplit(None, 1)
    if len(rest) != 2:
        return None
    function_name, module_name = rest
    return Frame(address=address, function_name=function_name, module_name=module_name)


def parse_captured_time(header: str) -> Optional[datetime]:
    parts = header.split(":", 1)
    if len(parts) != 2:
        return None
    text = parts[1].strip()
    for time_format in CAPTURED_ON_FORMATS:
        try:
            # naive local wall time, astimezone() attaches the local offset
            return datetime.strptime(text, time_format).astimezone()
        except ValueError:
            continue
    logger.warning(f"can't parse captured time '{text}'")
    return None


def verify_header(headers: List[str]) -> Tuple[datetime, int]:
    captured_time = None
    frequency = None

    for header in headers:
        if CAPTURED_ON_MARK in header:
            parsed = parse_captured_time(header)
            if parsed is not None:
                captured_time = parsed
            continue
        match = SAMPLE_FREQ_RE.search(header)
        if match:
            frequency = int(match.group(1))

    if captured_time is None:
        raise CapturedTimeNotFoundError()
    if frequency is None:
        raise SampleFrequencyError("sample_freq isn't found in the header")
    if frequency == 0:
        raise SampleFrequencyError("sample_freq in the header is zero")
    return captured_time, frequency


class PerfReader:
    """Single pass reader of `perf script --header` output.

    A reader instance holds the state of one pass and should not be reused.
    """

    def __init__(self):
        self.samples: Dict[Stack, int] = defaultdict(int)
        self.headers: List[str] = []
        self.skipped_frames: List[Tuple[int, str]] = []
        self._stack: List[Frame] = []
        self._is_event_line = True
        self._start_usec = None
        self._end_usec = None

    def read(self, reader: Iterable[Union[bytes, str]]) -> PerfData:
        for line_no, raw_line in enumerate(reader, 1):
            if isinstance(raw_line, bytes):
                raw_line = raw_line.decode("utf-8", errors="replace")
            self._feed(line_no, raw_line)
        # a dump not ending with a blank line still closes its last block
        self._finish_stack()

        if self._end_usec is None:
            raise DurationNotFoundError()
        if self._end_usec < self._start_usec:
            raise DurationNotFoundError(f"last event timestamp {self._end_usec}us is earlier "
                                        f"than the first one {self._start_usec}us")
        captured_time, frequency = verify_header(self.headers)

        if self.skipped_frames:
            logger.warning(f"skipped {len(self.skipped_frames)} malformed frame lines")
        perf_data = PerfData(samples=dict(self.samples),
                             captured_time=captured_time,
                             duration=timedelta(microseconds=self._end_usec - self._start_usec),
                             frequency=frequency,
                             skipped_frames=self.skipped_frames)
        logger.info(f"read {perf_data.total_samples} samples in {len(perf_data.samples)} distinct stacks, "
                    f"frequency {frequency}Hz, duration {perf_data.duration}")
        return perf_data

    def _feed(self, line_no: int, raw_line: str):
        if raw_line.startswith("#"):
            self.headers.append(raw_line.strip())
            return

        line = raw_line.strip()
        if not line:
            self._finish_stack()
            return

        if self._is_event_line:
            self._is_event_line = False
            usec = parse_event_time(line)
            if usec is None:
                logger.debug(f"line {line_no}: no timestamp in event line '{line}'")
            elif self._start_usec is None:
                self._start_usec = usec
            else:
                self._end_usec = usec
            return

        frame = parse_frame(line)
        if frame is None:
            logger.debug(f"line {line_no}: skip malformed frame '{line}'")
            self.skipped_frames.append((line_no, line))
            return
        self._stack.append(frame)

    def _finish_stack(self):
        self._is_event_line = True
        if self._stack:
            self.samples[tuple(self._stack)] += 1
            self._stack = []


def read_perf_script(reader: Iterable[Union[bytes, str]]) -> PerfData:
    return PerfReader().read(reader)
