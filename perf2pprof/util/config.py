# coding=utf-8
"""
Copyright (c) Huawei Technologies Co., Ltd. 2020-2028. All rights reserved.
Description: JSON configuration of the perf2pprof command
FileName：config.py
Create Date: 2026/10/18
Notes:
    lookup order: bundled defaults, then the file named by --config or
    PERF2PPROF_CONFIG. Command line flags are applied on top by main.
"""
import json
import os
from typing import Dict, Optional

from perf2pprof.errors import ConfigError
from perf2pprof.util.constant import CONFIG_PATH_ENV, DEFAULT_CONFIG_NAME, DEFAULT_INPUT, DEFAULT_OUTPUT, \
    DEFAULT_PERF_BINARY
from perf2pprof.util.logging_utils import get_default_logger

logger = get_default_logger(__name__)

BUNDLED_CONFIG_PATH = os.path.join(os.path.dirname(os.path.dirname(__file__)), "config", DEFAULT_CONFIG_NAME)

CONFIG_KEYS = {
    "input": str,
    "output": str,
    "perf_binary": str,
    "log_level": str,
}

FALLBACK_CONFIG = {
    "input": DEFAULT_INPUT,
    "output": DEFAULT_OUTPUT,
    "perf_binary": DEFAULT_PERF_BINARY,
    "log_level": "INFO",
}


def read_config_file(config_path: str) -> Dict:
    try:
        with open(config_path, 'r', encoding='utf-8') as reader:
            config = json.load(reader)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"can't read config {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise ConfigError(f"config {config_path} must hold a JSON object")

    checked = {}
    for key, value in config.items():
        expected_type = CONFIG_KEYS.get(key)
        if expected_type is None:
            logger.warning(f"unknown config key '{key}' in {config_path}, ignored")
            continue
        if not isinstance(value, expected_type):
            raise ConfigError(f"config key '{key}' must be a {expected_type.__name__}, got {type(value).__name__}")
        checked[key] = value
    return checked


def load_config(config_path: Optional[str] = None) -> Dict:
    config = dict(FALLBACK_CONFIG)
    if os.path.isfile(BUNDLED_CONFIG_PATH):
        config.update(read_config_file(BUNDLED_CONFIG_PATH))

    config_path = config_path or os.getenv(CONFIG_PATH_ENV)
    if config_path:
        logger.debug(f"loading config from {config_path}")
        config.update(read_config_file(config_path))
    return config
