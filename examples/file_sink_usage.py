"""examples/file_sink_usage.py - Write channel output to a file.

Builds an explicit DebugContext instead of using the environment-driven
default one, and appends every line to a rotating file.

Run:
    python examples/file_sink_usage.py
    cat /tmp/chanlog_demo/debug.log
"""

from chanlog import DebugContext
from chanlog.sink import FileSink

LOG_FILE = "/tmp/chanlog_demo/debug.log"

ctx = DebugContext(
    filter_expr="worker:*",
    sink=FileSink(LOG_FILE, max_bytes=1 * 1024 * 1024),
)

jobs = ctx.create("worker:jobs")
noisy = ctx.create("scheduler")  # not matched by the filter


if __name__ == "__main__":
    for n in range(5):
        jobs("processed job %d", n)
        noisy("tick %d", n)
    print(f"{len(ctx.history)} lines recorded, written to {LOG_FILE}")
