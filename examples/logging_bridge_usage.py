"""examples/logging_bridge_usage.py - Route ``logging`` output onto channels.

Existing code that logs through the standard library shows up as debug
channels named after its loggers.

Run:
    DEBUG='payments.*' python examples/logging_bridge_usage.py
"""

import logging

from chanlog import ChannelHandler

logger = logging.getLogger("payments.gateway")
logger.setLevel(logging.DEBUG)
logger.addHandler(ChannelHandler())
logger.propagate = False


def charge(user_id: int, amount: int) -> None:
    logger.debug("charging user_id=%s amount=%s", user_id, amount)
    if amount > 1000:
        try:
            raise ValueError("LimitExceeded")
        except ValueError:
            logger.error("charge rejected", exc_info=True)
        return
    logger.info("charge ok")


if __name__ == "__main__":
    charge(1, 100)
    charge(2, 5000)
