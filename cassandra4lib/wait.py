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

from tenacity import RetryError, Retrying, retry_if_not_exception_type, stop_after_delay, wait_fixed
from testcontainers.core.waiting_utils import wait_for_logs

from cassandra4lib import settings
from cassandra4lib.errors import ContainerLaunchError

logger = logging.getLogger(__name__)

STARTUP_LOG_PATTERN = r"Starting listening for CQL clients|Startup complete"
DEFAULT_QUERY = "SELECT now() FROM system.local"
EXITED_STATUSES = ("exited", "dead")


def _timeout_for(strategy, container):
    if strategy.timeout is not None:
        return strategy.timeout
    return getattr(container, "startup_timeout", settings.STARTUP_TIMEOUT)


def check_container_running(container):
    wrapped = container.get_wrapped_container()
    wrapped.reload()
    if wrapped.status in EXITED_STATUSES:
        raise ContainerLaunchError(f"Container exited before Cassandra was ready (status: {wrapped.status})")


class CassandraLogWaitStrategy(object):
    def __init__(self, predicate=STARTUP_LOG_PATTERN, timeout=None):
        self.predicate = predicate
        self.timeout = timeout

    def with_startup_timeout(self, timeout):
        self.timeout = timeout
        return self

    def wait_until_ready(self, container):
        timeout = _timeout_for(self, container)
        logger.info(f"Waiting up to {timeout}s for Cassandra to accept CQL clients")
        try:
            wait_for_logs(container, self.predicate, timeout=timeout, raise_on_exit=True)
        except RuntimeError as e:
            raise ContainerLaunchError(str(e)) from e


class CassandraQueryWaitStrategy(object):
    """Ready once a trivial query against system.local succeeds"""

    def __init__(self, query=DEFAULT_QUERY, timeout=None, interval=None):
        self.query = query
        self.timeout = timeout
        self.interval = interval if interval is not None else settings.QUERY_WAIT_INTERVAL

    def with_startup_timeout(self, timeout):
        self.timeout = timeout
        return self

    def wait_until_ready(self, container):
        timeout = _timeout_for(self, container)
        logger.info(f"Waiting up to {timeout}s for Cassandra to answer '{self.query}'")
        retrying = Retrying(
            stop=stop_after_delay(timeout),
            wait=wait_fixed(self.interval),
            retry=retry_if_not_exception_type(ContainerLaunchError),
        )
        try:
            retrying(self._run_query, container)
        except RetryError as e:
            raise TimeoutError(
                f"Cassandra did not answer '{self.query}' within {timeout}s"
            ) from e.last_attempt.exception()

    def _run_query(self, container):
        check_container_running(container)
        cluster = container.get_cluster()
        try:
            session = cluster.connect()
            session.execute(self.query)
        finally:
            cluster.shutdown()
