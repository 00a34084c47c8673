from __future__ import annotations

import logging

LOGGER = logging.getLogger(__name__)


class CounterModule:
    def __init__(self) -> None:
        self.frame = 0

    def init(self) -> None:
        LOGGER.info("counter module initialized")

    def tick(self) -> None:
        self.frame += 1
        if self.frame % 60 == 0:
            LOGGER.info("counter module at frame %d", self.frame)
