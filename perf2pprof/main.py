# coding=utf-8
"""
Copyright (c) Huawei Technologies Co., Ltd. 2020-2028. All rights reserved.
Description: command line entry point, converts perf script output to pprof
FileName：main.py
Create Date: 2026/10/18
Notes:
    perf2pprof -i perf.script -o cpu.pprof
    perf script --header | perf2pprof -o cpu.pprof
    perf2pprof --perf-data perf.data -o cpu.pprof
"""
import argparse
import io
import sys

from perf2pprof.converter import convert, run_perf_script
from perf2pprof.errors import ConfigError, ConvertError
from perf2pprof.util.config import load_config
from perf2pprof.util.constant import STDIO_PATH
from perf2pprof.util.logging_config import LOGGER_LEVEL_ENV
from perf2pprof.util.logging_utils import get_default_logger, set_log_level
from perf2pprof.util.utils import pick_first

logger = get_default_logger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(prog="perf2pprof",
                                     description="convert `perf script --header` output to pprof format")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("-i", "--input", type=str, default=None,
                        help="perf script text to convert, '-' reads stdin (default: -)")
    source.add_argument("--perf-data", type=str, default=None,
                        help="perf.data file, converted through `perf script --header -i`")
    parser.add_argument("-o", "--output", type=str, default=None,
                        help="output file, '-' writes stdout (default: cpu.pprof)")
    parser.add_argument("-c", "--config", type=str, default=None,
                        help="JSON config file (default: $PERF2PPROF_CONFIG or the bundled one)")
    parser.add_argument("--log-level", type=str.upper, default=None, choices=sorted(LOGGER_LEVEL_ENV),
                        help="log level (default: INFO)")
    return parser


def write_output(output_path, data: bytes):
    if output_path == STDIO_PATH:
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()
        return
    with open(output_path, "wb") as writer:
        writer.write(data)


def run(args) -> int:
    config = load_config(args.config)
    set_log_level(pick_first(args.log_level, config["log_level"]))

    output_path = pick_first(args.output, config["output"])
    input_path = pick_first(args.input, config["input"])
    # the profile is kept in memory so a failed conversion leaves no output file
    buffer = io.BytesIO()
    if args.perf_data:
        perf_data = convert(run_perf_script(args.perf_data, config["perf_binary"]), buffer)
    elif input_path == STDIO_PATH:
        perf_data = convert(sys.stdin.buffer, buffer)
    else:
        with open(input_path, "rb") as reader:
            perf_data = convert(reader, buffer)

    write_output(output_path, buffer.getvalue())
    logger.info(f"saved {perf_data.total_samples} samples to {output_path}")
    return 0


def main(argv=None):
    args = build_parser().parse_args(argv)
    try:
        return run(args)
    except (ConvertError, ConfigError, OSError) as e:
        logger.error(f"perf2pprof failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
