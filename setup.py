#!/usr/bin/python3
# ******************************************************************************
# Copyright (c) 2022 Huawei Technologies Co., Ltd.
# perf2pprof is licensed under Mulan PSL v2.
# You can use this software according to the terms and conditions of the Mulan PSL v2.
# You may obtain a copy of Mulan PSL v2 at:
#          http://license.coscl.org.cn/MulanPSL2
# THIS SOFTWARE IS PROVIDED ON AN "AS IS" BASIS, WITHOUT WARRANTIES OF ANY KIND,
# EITHER EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO NON-INFRINGEMENT,
# MERCHANTABILITY OR FIT FOR A PARTICULAR PURPOSE.
# See the Mulan PSL v2 for more details.
# ******************************************************************************/

from setuptools import setup, find_packages

setup(
    name="perf2pprof",
    version="1.0.0",
    description="Convert perf script output into gzip-compressed pprof CPU profiles",
    url="https://gitee.com/openeuler/sysTrace",
    keywords=["perf", "pprof", "CPU profile", "flamegraph"],
    python_requires=">=3.8",
    packages=find_packages(where=".", exclude=("tests", "tests.*")),
    package_data={
        "perf2pprof": ["config/*.json"],
        "perf2pprof.proto": ["*.proto"],
    },
    install_requires=[
        "protobuf>=4.21",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "perf2pprof=perf2pprof.main:main",
        ]
    }
)
