# coding=utf-8
import gzip
import io
import os
from datetime import datetime, timedelta, timezone

import pytest

from perf2pprof.errors import EncodeError, SampleFrequencyError
from perf2pprof.perf_reader import Frame, PerfData
from perf2pprof.pprof_encoder import PprofEncoder, to_epoch_nanos
from perf2pprof.proto import profile_pb2
from perf2pprof.proto.profile_pb2 import Profile

CAPTURED = datetime(2022, 3, 10, 10, 45, 19, tzinfo=timezone.utc)

MAIN = Frame(0xabcd, "main", "/bin/app")
FOO = Frame(0x1000, "foo", "/bin/app")
BAR = Frame(0x2000, "bar", "/lib/libbar.so")


def make_perf_data(samples, frequency=100, duration=timedelta(seconds=1)):
    return PerfData(samples=samples, captured_time=CAPTURED, duration=duration, frequency=frequency)


def decode(data: bytes) -> Profile:
    return Profile.FromString(gzip.decompress(data))


def test_single_sample_profile():
    profile = decode(PprofEncoder().serialize(make_perf_data({(MAIN,): 2})))

    assert list(profile.string_table) == ["", "samples", "count", "cpu", "nanoseconds", "main"]
    assert [(t.type, t.unit) for t in profile.sample_type] == [(1, 2), (3, 4)]
    assert (profile.period_type.type, profile.period_type.unit) == (3, 4)
    assert profile.period == 10_000_000
    assert profile.duration_nanos == 1_000_000_000
    assert profile.time_nanos == 1646909119 * 1_000_000_000

    assert len(profile.sample) == 1
    assert list(profile.sample[0].location_id) == [1]
    assert list(profile.sample[0].value) == [2, 2 * 1_000_000_000 // 100]

    assert len(profile.location) == 1
    location = profile.location[0]
    assert (location.id, location.address) == (1, 0xabcd)
    assert [(line.function_id, line.line) for line in location.line] == [(1, 0)]

    assert len(profile.function) == 1
    assert (profile.function[0].id, profile.function[0].name) == (1, 5)
    assert profile.function[0].filename == 0
    assert len(profile.mapping) == 0


def test_ids_follow_first_sight_order():
    encoder = PprofEncoder()
    profile = encoder.build_profile(make_perf_data({
        (FOO, MAIN): 3,
        (BAR, FOO, MAIN): 1,
    }))

    assert [list(s.location_id) for s in profile.sample] == [[1, 2], [3, 1, 2]]
    assert [(l.id, l.address, l.line[0].function_id) for l in profile.location] == [
        (1, 0x1000, 1), (2, 0xabcd, 2), (3, 0x2000, 3)]
    names = [profile.string_table[f.name] for f in profile.function]
    assert names == ["foo", "main", "bar"]
    assert [f.id for f in profile.function] == [1, 2, 3]


def test_same_address_keeps_first_function():
    renamed = Frame(0xabcd, "main_alias", "/bin/app")
    profile = PprofEncoder().build_profile(make_perf_data({(MAIN,): 1, (renamed, FOO): 1}))

    assert [list(s.location_id) for s in profile.sample] == [[1], [1, 2]]
    assert len(profile.location) == 2
    assert "main_alias" not in profile.string_table


def test_shared_function_name_across_addresses():
    other_main = Frame(0xabce, "main", "/bin/app")
    profile = PprofEncoder().build_profile(make_perf_data({(MAIN,): 1, (other_main,): 1}))

    assert [l.line[0].function_id for l in profile.location] == [1, 1]
    assert len(profile.function) == 1
    assert list(profile.string_table).count("main") == 1


def test_values_use_truncating_division():
    profile = PprofEncoder().build_profile(make_perf_data({(MAIN,): 7}, frequency=997))

    assert list(profile.sample[0].value) == [7, 7 * 1_000_000_000 // 997]
    assert profile.period == 1_000_000_000 // 997


def test_duration_nanos_from_microseconds():
    perf_data = make_perf_data({(MAIN,): 1}, duration=timedelta(microseconds=1_234_567))
    profile = PprofEncoder().build_profile(perf_data)

    assert profile.duration_nanos == 1_234_567_000


def test_same_input_encodes_identically():
    samples = {(FOO, MAIN): 3, (BAR, MAIN): 2, (MAIN,): 1}
    first = gzip.decompress(PprofEncoder().serialize(make_perf_data(samples)))
    second = gzip.decompress(PprofEncoder().serialize(make_perf_data(samples)))

    assert first == second


def test_encode_writes_complete_gzip_member():
    writer = io.BytesIO()
    size = PprofEncoder().encode(make_perf_data({(MAIN,): 2}), writer)

    data = writer.getvalue()
    assert size == len(data)
    assert data[:2] == b"\x1f\x8b"
    assert decode(data).sample[0].value[0] == 2


def test_zero_frequency_is_rejected():
    writer = io.BytesIO()
    with pytest.raises(SampleFrequencyError):
        PprofEncoder().encode(make_perf_data({(MAIN,): 1}, frequency=0), writer)
    assert writer.getvalue() == b""


def test_out_of_range_value_is_an_encode_error():
    writer = io.BytesIO()
    with pytest.raises(EncodeError):
        PprofEncoder().encode(make_perf_data({(MAIN,): 2 ** 62}, frequency=1), writer)
    assert writer.getvalue() == b""


def test_to_epoch_nanos_keeps_microseconds():
    moment = datetime(2022, 3, 10, 10, 45, 19, 123456, tzinfo=timezone.utc)

    assert to_epoch_nanos(moment) == 1646909119 * 1_000_000_000 + 123_456_000


def test_profile_messages_come_from_bundled_proto():
    proto_path = os.path.join(os.path.dirname(profile_pb2.__file__), "profile.proto")

    assert os.path.isfile(proto_path)
    assert profile_pb2.DESCRIPTOR.name == "perf2pprof/proto/profile.proto"
    assert profile_pb2.DESCRIPTOR.package == "perftools.profiles"
    fields = {f.name: f.number for f in Profile.DESCRIPTOR.fields}
    assert fields["string_table"] == 6
    assert fields["time_nanos"] == 9
    assert fields["period"] == 12
