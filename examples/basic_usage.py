"""examples/basic_usage.py - chanlog channel demo.

Run with different filters to see channels switch on and off:

    DEBUG='*' python examples/basic_usage.py
    DEBUG='app:*,-app:sql' python examples/basic_usage.py
    DEBUG='*' DEBUG_HIDE_DATE=1 python examples/basic_usage.py | cat
"""

import time

from chanlog import create_logger, get_history, trace

log = create_logger("app:main")
sql = create_logger("app:sql")
http = create_logger("app:http")
boot = create_logger("boot*")  # always on


@trace(http)
def fetch(url: str, retries: int = 1) -> int:
    http("GET %s", url)
    time.sleep(0.05)
    return 200


if __name__ == "__main__":
    boot("starting")
    log("loaded %d plugins", 3)
    sql("SELECT * FROM users WHERE id = %j", 42)
    fetch("https://example.invalid/health")
    time.sleep(1.2)
    log("done after a pause")

    print()
    print("History:")
    for record in get_history():
        print(f"  {record.when:%H:%M:%S} {record.who:<10} {record.log}")
