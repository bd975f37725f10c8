# coding=utf-8
"""
Copyright (c) Huawei Technologies Co., Ltd. 2020-2028. All rights reserved.
Description: perf script text in, gzip-compressed pprof out
FileName：converter.py
Create Date: 2026/10/18
Notes:

"""
import io
import os
import subprocess
from typing import BinaryIO, Iterable, List, Union

from perf2pprof.errors import PerfCommandError
from perf2pprof.perf_reader import PerfData, PerfReader
from perf2pprof.pprof_encoder import PprofEncoder
from perf2pprof.util.constant import DEFAULT_PERF_BINARY
from perf2pprof.util.logging_utils import get_default_logger
from perf2pprof.util.utils import cal_time

logger = get_default_logger(__name__)

__all__ = ['convert', 'convert_file', 'run_perf_script']


@cal_time(logger)
def convert(reader: Iterable[Union[bytes, str]], writer: BinaryIO) -> PerfData:
    """Convert one perf script dump read from reader into a pprof profile on writer.

    Nothing is written unless the whole profile was built and compressed.
    """
    perf_data = PerfReader().read(reader)
    PprofEncoder().encode(perf_data, writer)
    return perf_data


def convert_file(input_path: str, output_path: str) -> PerfData:
    logger.info(f"converting {input_path} -> {output_path}")
    buffer = io.BytesIO()
    with open(input_path, "rb") as reader:
        perf_data = convert(reader, buffer)

    with open(output_path, "wb") as writer:
        writer.write(buffer.getvalue())
    return perf_data


def run_perf_script(perf_data_path: str, perf_binary: str = DEFAULT_PERF_BINARY) -> List[bytes]:
    """Return the lines of `perf script --header -i perf_data_path`."""
    if not os.path.exists(perf_data_path):
        raise PerfCommandError(f"perf data file {perf_data_path} doesn't exist")

    cmd = [perf_binary, "script", "--header", "-i", perf_data_path]
    logger.info(f"running {' '.join(cmd)}")
    try:
        result = subprocess.run(cmd, capture_output=True, check=False)
    except OSError as e:
        raise PerfCommandError(f"failed to execute {perf_binary}: {e}") from e

    if result.returncode != 0:
        stderr = result.stderr.decode("utf-8", errors="replace").strip()
        raise PerfCommandError(f"{perf_binary} script exited with {result.returncode}: {stderr}")
    return result.stdout.splitlines(keepends=True)
