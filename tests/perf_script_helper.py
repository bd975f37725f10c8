# coding=utf-8
"""Builders of perf script text shared by the test modules."""

CAPTURED_ON = "# captured on    : Thu Mar 10 10:45:19 2022"
SAMPLE_FREQ = "# event : name = cpu-clock, , id = { 11 }, type = 1, size = 120, { sample_period, sample_freq } = 100"

DEFAULT_HEADERS = (
    "# ========",
    CAPTURED_ON,
    "# hostname : build-host",
    SAMPLE_FREQ,
    "# ========",
    "#",
)


def event_line(seconds, comm="app", pid=4242):
    return f"{comm} {pid} {seconds:.6f}: 10101010 cpu-clock:"


def frame_line(address, function_name, module="(/bin/app)"):
    return f"\t    {address} {function_name} {module}"


def make_script(blocks, headers=DEFAULT_HEADERS, start=10.0, step=0.5):
    """Render perf script text, blocks is a list of frame line lists."""
    lines = list(headers)
    for index, frames in enumerate(blocks):
        lines.append(event_line(start + index * step))
        lines.extend(frames)
        lines.append("")
    return "\n".join(lines) + "\n"


def to_lines(text):
    return text.encode("utf-8").splitlines(keepends=True)
