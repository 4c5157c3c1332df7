# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

import pytest

from edgytable import TableSettings, init_settings
from edgytable.config import reset_settings

from tests.support import RecordingQueryBuilder


@pytest.fixture(autouse=True)
def settings():
    settings = init_settings(TableSettings(_env_file=None))
    yield settings
    reset_settings()


@pytest.fixture
def query():
    return RecordingQueryBuilder()
