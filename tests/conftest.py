import logging

import pytest

from notes_vault import metrics


@pytest.fixture(autouse=True)
def _reset_metrics_and_logging():
    metrics.reset()
    yield
    # configure_logging() binds handlers to whatever stream was current.
    logging.getLogger().handlers.clear()
