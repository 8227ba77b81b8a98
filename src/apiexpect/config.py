from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any

from apiexpect.assertion import AssertionSeverity
from apiexpect.formatter import DefaultFormatter
from apiexpect.handler import DefaultAssertionHandler
from apiexpect.reporter import AssertReporter

LOGGER_NAME = "apiexpect"


@dataclass(frozen=True)
class Config:
    """Settings read once when a root chain is built.

    Only ``reporter`` is usually given; anything left as None is filled in by
    with_defaults(). When ``assertion_handler`` is set, ``reporter``,
    ``formatter`` and ``logger`` are not used by the chain.
    """

    reporter: Any = None
    assertion_handler: Any = None
    formatter: Any = None
    logger: logging.Logger | None = None
    test_name: str = ""
    environment: Any = None
    severity: AssertionSeverity = AssertionSeverity.ERROR

    def with_defaults(self) -> Config:
        if self.assertion_handler is not None:
            return self

        formatter = self.formatter or DefaultFormatter()
        reporter = self.reporter or AssertReporter()
        logger = self.logger or logging.getLogger(LOGGER_NAME)
        return replace(
            self,
            formatter=formatter,
            reporter=reporter,
            logger=logger,
            assertion_handler=DefaultAssertionHandler(formatter, reporter, logger),
        )
