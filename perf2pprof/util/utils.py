# coding=utf-8
import logging
import time
from functools import wraps


def cal_time(log_obj: logging.Logger, logger_level="info"):
    def _cal_time(func):
        @wraps(func)
        def _wrap(*args, **kwargs):
            t0 = time.perf_counter()
            res = func(*args, **kwargs)
            t1 = time.perf_counter()
            msg = f"function named '{func.__name__}' cost {t1 - t0:.6f}s"
            getattr(log_obj, logger_level)(msg)
            return res

        return _wrap

    return _cal_time


def pick_first(*values):
    """Return the first value that is not None."""
    for value in values:
        if value is not None:
            return value
    return None
