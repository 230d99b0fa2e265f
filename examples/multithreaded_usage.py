"""examples/multithreaded_usage.py - Channels shared across threads.

Every worker asks for the same channel name and gets the same handle. Lines
from all threads land in one shared history, and each line is written whole.

Run:
    DEBUG='pool:*' python examples/multithreaded_usage.py
"""

import threading
import time

from chanlog import create_logger, get_history


def worker(n: int) -> None:
    log = create_logger("pool:worker")
    for step in range(3):
        log("thread %d step %d", n, step)
        time.sleep(0.01 * n)


if __name__ == "__main__":
    threads = [threading.Thread(target=worker, args=(n,), name=f"w{n}") for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    print(f"{len(get_history())} records in history")
