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

import pytest
import yaml

from conftest import RESOURCES_DIR
from cassandra4lib import Cassandra4Container, CassandraQueryWaitStrategy
from cassandra4lib.errors import ContainerLaunchError, ResourceNotFoundError
from cassandra4lib.resources import SearchPathResourceLoader

logger = logging.getLogger(__name__)

pytestmark = pytest.mark.integration

CASSANDRA_IMAGE = "cassandra:3.11.2"
TEST_CONFIGURATION = "cassandra-test-configuration-example"


def perform_query(cassandra, cql):
    cluster = cassandra.get_cluster()
    try:
        session = cluster.connect()
        return list(session.execute(cql))
    finally:
        cluster.shutdown()


def expected_cluster_name():
    with open(os.path.join(RESOURCES_DIR, TEST_CONFIGURATION, "cassandra.yaml"), "r", encoding="utf-8") as file:
        return yaml.safe_load(file)["cluster_name"]


@pytest.fixture
def loader():
    return SearchPathResourceLoader([RESOURCES_DIR])


def test_simple(docker_available, loader):  # pylint: disable=unused-argument
    with Cassandra4Container(CASSANDRA_IMAGE, loader=loader) as cassandra:
        rows = perform_query(cassandra, "SELECT release_version FROM system.local")
        assert rows[0].release_version is not None, "Result set has no release_version"


def test_specific_version(docker_available, loader):  # pylint: disable=unused-argument
    cassandra_version = "3.0.15"
    with Cassandra4Container(f"cassandra:{cassandra_version}", loader=loader) as cassandra:
        rows = perform_query(cassandra, "SELECT release_version FROM system.local")
        assert rows[0].release_version == cassandra_version, "Cassandra has wrong version"


def test_configuration_override(docker_available, loader):  # pylint: disable=unused-argument
    cassandra = Cassandra4Container(CASSANDRA_IMAGE, loader=loader).with_configuration_override(TEST_CONFIGURATION)
    with cassandra:
        rows = perform_query(cassandra, "SELECT cluster_name FROM system.local")
        assert rows[0].cluster_name == expected_cluster_name(), "Cassandra configuration is not overridden"


def test_empty_configuration_override(docker_available, loader):  # pylint: disable=unused-argument
    cassandra = (
        Cassandra4Container(CASSANDRA_IMAGE, loader=loader)
        .with_configuration_override("cassandra-empty-configuration")
        .with_startup_attempts(2)
        .with_startup_timeout(60)
    )
    with pytest.raises(ContainerLaunchError):
        cassandra.start()
    assert cassandra._container is None  # pylint: disable=protected-access


def check_init_script(cassandra):
    rows = perform_query(cassandra, "SELECT * FROM keySpaceTest.catalog_category")
    assert len(rows) == 1
    assert rows[0][0] == 1, "Inserted row is not in expected state"
    assert rows[0][1] == "test_category", "Inserted row is not in expected state"


def test_init_script(docker_available, loader):  # pylint: disable=unused-argument
    with Cassandra4Container(CASSANDRA_IMAGE, loader=loader).with_init_script("initial.cql") as cassandra:
        check_init_script(cassandra)


def test_init_script_with_legacy_cassandra(docker_available, loader):  # pylint: disable=unused-argument
    with Cassandra4Container("cassandra:2.2.11", loader=loader).with_init_script("initial.cql") as cassandra:
        check_init_script(cassandra)


def test_missing_init_script(docker_available, loader):  # pylint: disable=unused-argument
    cassandra = Cassandra4Container(CASSANDRA_IMAGE, loader=loader).with_init_script("missing.cql")
    with pytest.raises(ResourceNotFoundError):
        cassandra.start()
    assert cassandra._container is None  # pylint: disable=protected-access


def test_query_wait_strategy(docker_available, loader):  # pylint: disable=unused-argument
    cassandra = Cassandra4Container(loader=loader).waiting_for(CassandraQueryWaitStrategy())
    with cassandra:
        rows = perform_query(cassandra, "SELECT release_version FROM system.local")
        assert rows, "Query was not applied"


def test_get_cluster(docker_available, loader):  # pylint: disable=unused-argument
    with Cassandra4Container(loader=loader) as cassandra:
        cluster = cassandra.get_cluster()
        try:
            row = cluster.connect().execute("SELECT release_version FROM system.local").one()
        finally:
            cluster.shutdown()
        assert row.release_version is not None, "Result set has no release_version"
