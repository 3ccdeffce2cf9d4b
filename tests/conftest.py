import logging
import sys

import pytest
import structlog


@pytest.fixture(autouse=True, scope="session")
def _quiet_structlog():
    # Keep debug events off stdout, where the CLI writes its JSON lines
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )
    yield
    structlog.reset_defaults()
