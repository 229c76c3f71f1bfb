#!/usr/bin/env python3
#
# Copyright 2025 Telefonaktiebolaget LM Ericsson
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#

import logging
import os
from unittest.mock import patch

import docker
import pytest

from cassandra4lib.delegate import DatabaseDelegate
from cassandra4lib.errors import ScriptStatementFailedError
from cassandra4lib.resources import SearchPathResourceLoader

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

TEST_DIR = os.path.dirname(os.path.realpath(__file__))
RESOURCES_DIR = os.path.join(TEST_DIR, "resources")

INITIAL_CQL_STATEMENTS = [
    "CREATE KEYSPACE keySpaceTest WITH REPLICATION = { 'class' : 'SimpleStrategy', 'replication_factor' : 1 }",
    "USE keySpaceTest",
    "CREATE TABLE catalog_category ( id bigint primary key, name text )",
    "INSERT INTO catalog_category (id, name) VALUES (1, 'test_category')",
]


class RecordingDelegate(DatabaseDelegate):
    """Records statements instead of sending them to Cassandra"""

    def __init__(self, log=None, fail_on=None):
        self.log = log if log is not None else []
        self.fail_on = fail_on
        self.closed = False

    def execute_statement(self, statement, script_path, line_number):
        self.log.append(statement)
        if self.fail_on and self.fail_on in statement:
            raise ScriptStatementFailedError(statement, line_number, script_path)

    def close(self):
        self.closed = True


class FakeWaitStrategy:
    def __init__(self, failures=0, error=TimeoutError):
        self.calls = 0
        self.failures = failures
        self.error = error

    def wait_until_ready(self, container):  # pylint: disable=unused-argument
        self.calls += 1
        if self.calls <= self.failures:
            raise self.error("Cassandra did not become ready")


@pytest.fixture
def resource_loader():
    return SearchPathResourceLoader([RESOURCES_DIR])


@pytest.fixture
def docker_client_stub():
    """Containers can be built without a docker daemon"""
    with patch("testcontainers.core.container.DockerClient") as stub:
        yield stub


@pytest.fixture(scope="session")
def docker_available():
    try:
        client = docker.from_env()
        client.ping()
        client.close()
    except (docker.errors.DockerException, OSError) as e:
        pytest.skip(f"Docker is not available: {e}")
    return True
