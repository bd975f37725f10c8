# coding=utf-8
"""
Copyright (c) Huawei Technologies Co., Ltd. 2020-2028. All rights reserved.
Description: builds a gzip-compressed pprof profile from aggregated perf stacks
FileName：pprof_encoder.py
Create Date: 2026/10/18
Notes:
    ids are handed out on first sight: strings from 0 (0..4 pre-seeded),
    functions and locations from 1.
"""
import gzip
from datetime import datetime
from typing import BinaryIO, Dict, List, Tuple

from google.protobuf.message import EncodeError as ProtobufEncodeError

from perf2pprof.errors import EncodeError, SampleFrequencyError
from perf2pprof.perf_reader import Frame, PerfData
from perf2pprof.proto.profile_pb2 import Function, Line, Location, Profile, Sample, ValueType
from perf2pprof.util.constant import PRESEEDED_STRINGS, SECOND_TO_NS, US_TO_NS, StringId
from perf2pprof.util.logging_utils import get_default_logger

logger = get_default_logger(__name__)

__all__ = ['PprofEncoder', 'to_epoch_nanos']


def to_epoch_nanos(moment: datetime) -> int:
    # integer math, float timestamps lose nanosecond precision
    return int(moment.replace(microsecond=0).timestamp()) * SECOND_TO_NS + moment.microsecond * US_TO_NS


class PprofEncoder:
    """Interns one perf dump into a pprof Profile message.

    The intern tables live on the instance; use a fresh encoder per conversion.
    """

    def __init__(self):
        self._strings: Dict[str, int] = {s: i for i, s in enumerate(PRESEEDED_STRINGS)}
        # name -> (function id, name string id)
        self._functions: Dict[str, Tuple[int, int]] = {}
        # address -> (location id, function id)
        self._locations: Dict[int, Tuple[int, int]] = {}

    @property
    def string_table(self) -> List[str]:
        return sorted(self._strings, key=self._strings.get)

    @property
    def function_count(self) -> int:
        return len(self._functions)

    @property
    def location_count(self) -> int:
        return len(self._locations)

    def string_id(self, s: str) -> int:
        str_id = self._strings.get(s)
        if str_id is None:
            str_id = len(self._strings)
            self._strings[s] = str_id
        return str_id

    def function_id(self, name: str) -> int:
        entry = self._functions.get(name)
        if entry is None:
            entry = (len(self._functions) + 1, self.string_id(name))
            self._functions[name] = entry
        return entry[0]

    def location_id(self, frame: Frame) -> int:
        entry = self._locations.get(frame.address)
        if entry is None:
            entry = (len(self._locations) + 1, self.function_id(frame.function_name))
            self._locations[frame.address] = entry
        elif self._functions.get(frame.function_name, (None,))[0] != entry[1]:
            # first writer wins
            logger.debug(f"address 0x{frame.address:x} also seen as '{frame.function_name}', "
                         f"keeping function id {entry[1]}")
        return entry[0]

    def build_profile(self, perf_data: PerfData) -> Profile:
        frequency = perf_data.frequency
        if frequency <= 0:
            raise SampleFrequencyError(f"sample frequency must be positive, got {frequency}")

        samples = []
        for stack, count in perf_data.samples.items():
            samples.append(Sample(
                location_id=[self.location_id(frame) for frame in stack],
                value=[count, count * SECOND_TO_NS // frequency],
            ))

        functions = [
            Function(id=func_id, name=str_id)
            for func_id, str_id in sorted(self._functions.values())
        ]
        locations = [
            Location(id=loc_id, address=address, line=[Line(function_id=func_id, line=0)])
            for address, (loc_id, func_id) in sorted(self._locations.items(), key=lambda item: item[1][0])
        ]

        return Profile(
            sample_type=[
                ValueType(type=StringId.samples, unit=StringId.count),
                ValueType(type=StringId.cpu, unit=StringId.nanoseconds),
            ],
            sample=samples,
            location=locations,
            function=functions,
            string_table=self.string_table,
            time_nanos=to_epoch_nanos(perf_data.captured_time),
            duration_nanos=perf_data.duration_nanos,
            period=SECOND_TO_NS // frequency,
            period_type=ValueType(type=StringId.cpu, unit=StringId.nanoseconds),
        )

    def serialize(self, perf_data: PerfData) -> bytes:
        """Return the gzip-compressed encoding of the profile."""
        try:
            # out of range integers already fail while the messages are built
            content = self.build_profile(perf_data).SerializeToString()
        except (ProtobufEncodeError, ValueError, TypeError) as e:
            raise EncodeError(f"can't serialize profile: {e}") from e
        return gzip.compress(content)

    def encode(self, perf_data: PerfData, writer: BinaryIO) -> int:
        """Write the compressed profile to writer in one piece, return its size."""
        data = self.serialize(perf_data)
        writer.write(data)
        if hasattr(writer, "flush"):
            writer.flush()
        logger.info(f"wrote pprof: {len(perf_data.samples)} samples, {self.function_count} functions, "
                    f"{self.location_count} locations, {len(data)} bytes")
        return len(data)
