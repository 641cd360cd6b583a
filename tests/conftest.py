import logging

import pytest

from verifi import create_sample_credential

NOW = 1_700_000_000


@pytest.fixture(autouse=True)
def _restore_root_logging():
    # the CLI reconfigures the root logger
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def sample_credential():
    return create_sample_credential(NOW)


@pytest.fixture
def sample_record(sample_credential):
    return sample_credential.to_dict()
