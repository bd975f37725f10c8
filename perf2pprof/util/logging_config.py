# coding=utf-8
import logging
import os

LOGGER_LEVEL_ENV = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR
}

LOG_FILE_ROOT = os.getenv("PERF2PPROF_LOG_DIR", os.path.join(os.path.expanduser("~"), ".perf2pprof", "log"))
LOG_FILE_NAME = "perf2pprof.log"

LOG_LEVEL = LOGGER_LEVEL_ENV.get(os.getenv("PERF2PPROF_LOG_LEVEL", "INFO").upper(), logging.INFO)
# number of zipped backups kept
MAX_BACKUP_COUNT = 5
# in megabytes
FILE_SIZE = 50

PRINT_LOG_TO_CONSOLE = os.getenv("PERF2PPROF_LOG_TO_CONSOLE", "1").lower() not in ("0", "false", "no")
MAX_SIZE = FILE_SIZE * 1024 * 1024

LOGGER_CONTENT_FORMAT = "%(asctime)s.%(msecs)03d(%(process)d|%(thread)d)\
[%(levelname)s][%(module)s:%(lineno)d]%(message)s"

LOGGER_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
