# coding=utf-8
import pytest

from tests.perf_script_helper import frame_line, make_script


@pytest.fixture
def scenario_script():
    # two identical single-frame blocks one second apart
    return make_script([
        [frame_line("abcd", "main")],
        [frame_line("abcd", "main")],
    ], step=1.0)
