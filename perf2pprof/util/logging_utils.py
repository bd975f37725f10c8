# coding=utf-8

import logging
import logging.handlers
import os
import sys
from zipfile import ZIP_DEFLATED, ZipFile

from perf2pprof.util import logging_config
from perf2pprof.util.logging_config import MAX_SIZE, MAX_BACKUP_COUNT, LOG_LEVEL, LOG_FILE_ROOT, LOG_FILE_NAME, \
    PRINT_LOG_TO_CONSOLE

__DEFAULT_LOGGERS = dict()

formatter = logging.Formatter(
    logging_config.LOGGER_CONTENT_FORMAT,
    logging_config.LOGGER_TIME_FORMAT)


def get_default_logger(module="default", log_path=None) -> logging.Logger:
    global __DEFAULT_LOGGERS
    if not __DEFAULT_LOGGERS.get(module):
        __DEFAULT_LOGGERS[module] = get_logger(module=module,
                                               log_path=log_path or os.path.join(LOG_FILE_ROOT, LOG_FILE_NAME),
                                               max_file_size=MAX_SIZE,
                                               max_backup_count=MAX_BACKUP_COUNT)

    return __DEFAULT_LOGGERS.get(module)


def get_logger(module, log_path, max_file_size, max_backup_count, to_console=PRINT_LOG_TO_CONSOLE):
    logger = logging.getLogger(module)
    if len(logger.handlers) == 0:
        logger.propagate = False
        logger.setLevel(LOG_LEVEL)
        if to_console:
            # stdout may carry the profile itself
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(formatter)
        else:
            handler = get_log_handler(log_path, max_file_size, max_backup_count)
        logger.addHandler(handler)
    return logger


def set_log_level(level):
    """Change the level of every logger handed out by get_default_logger."""
    if isinstance(level, str):
        level = logging_config.LOGGER_LEVEL_ENV.get(level.upper(), logging.INFO)
    for logger in __DEFAULT_LOGGERS.values():
        logger.setLevel(level)


def zip_log_namer(name):
    return name + ".zip"


def zip_log_rotator(source, dest):
    """Compress the rotated log into dest and drop the plain copy."""
    try:
        with ZipFile(dest, "w", ZIP_DEFLATED) as archived_file:
            archived_file.write(source, os.path.basename(source))
    finally:
        if os.path.exists(source):
            os.remove(source)


def get_log_handler(log_path, max_file_size, max_backup_count):
    try:
        os.makedirs(os.path.dirname(log_path), 0o750, exist_ok=True)
        handler = logging.handlers.RotatingFileHandler(log_path,
                                                       maxBytes=max_file_size,
                                                       backupCount=max_backup_count)
        handler.rotator = zip_log_rotator
        handler.namer = zip_log_namer
    except OSError:
        # unwritable log directory, fall back to the console
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    return handler
