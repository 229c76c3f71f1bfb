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

import docker.errors
from tenacity import RetryError, Retrying, retry_if_not_exception_type, stop_after_attempt
from testcontainers.core.container import DockerContainer

from cassandra4lib import settings
from cassandra4lib.delegate import CassandraDatabaseDelegate
from cassandra4lib.errors import ContainerLaunchError, ResourceLoadError
from cassandra4lib.init_script import InitScriptApplier
from cassandra4lib.override import CONTAINER_CONFIG_LOCATION, ConfigurationOverrideResolver, release
from cassandra4lib.resources import SearchPathResourceLoader
from cassandra4lib.wait import CassandraLogWaitStrategy

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY_PREFIXES = ("docker.io/", "index.docker.io/", "library/")


def repository_of(image):
    name = image.split("@", 1)[0]
    last_slash = name.rfind("/")
    colon = name.rfind(":")
    if colon > last_slash:
        name = name[:colon]
    return name


def assert_compatible_with(image, expected):
    repository = repository_of(image)
    normalized = repository
    for prefix in DEFAULT_REGISTRY_PREFIXES:
        if normalized.startswith(prefix):
            normalized = normalized[len(prefix):]
    if normalized == expected or repository in settings.COMPATIBLE_IMAGES or image in settings.COMPATIBLE_IMAGES:
        return
    raise ValueError(
        "Failed to verify that image '{0}' is a compatible substitute for '{1}'. "
        "Add it to CASSANDRA_COMPATIBLE_IMAGES if it is.".format(image, expected)
    )


class Cassandra4Container(DockerContainer):
    """
    Cassandra container for integration tests.

    The configuration directory can be replaced with a directory resource before start
    and a CQL script can be applied once the node accepts clients:

        with Cassandra4Container().with_init_script("initial.cql") as cassandra:
            session = cassandra.get_cluster().connect()
    """

    # pylint: disable=too-many-instance-attributes

    DEFAULT_IMAGE_NAME = "cassandra"
    DEFAULT_TAG = "3.11.2"
    IMAGE = DEFAULT_IMAGE_NAME  # deprecated, use DEFAULT_IMAGE_NAME

    CQL_PORT = 9042
    CONTAINER_CONFIG_LOCATION = CONTAINER_CONFIG_LOCATION
    USERNAME = "cassandra"
    PASSWORD = "cassandra"

    def __init__(self, image=None, loader=None, **kwargs):
        image = image or settings.CASSANDRA_IMAGE
        assert_compatible_with(image, self.DEFAULT_IMAGE_NAME)
        super().__init__(image=image, **kwargs)

        self.loader = loader if loader is not None else SearchPathResourceLoader()
        self.config_location = None
        self.init_script_path = None
        self.startup_attempts = None
        self.with_startup_attempts(settings.STARTUP_ATTEMPTS)
        self.startup_timeout = settings.STARTUP_TIMEOUT
        self.wait_strategy = CassandraLogWaitStrategy()
        self._resolver = ConfigurationOverrideResolver(self.loader, self.CONTAINER_CONFIG_LOCATION)
        self._applier = InitScriptApplier(self.loader)
        self._override_mount = None

        self.with_exposed_ports(self.CQL_PORT)

    def with_configuration_override(self, config_location):
        """
        Replace the configuration directory with the content of config_location.

        The whole directory is replaced, so config_location needs cassandra.yaml and any other
        file the image expects. Cassandra will not start without them.

        The override is staged in a local temporary directory and bind mounted, so the docker
        daemon has to share a filesystem with this process. A remote DOCKER_HOST will not see it.
        """
        self.config_location = config_location
        return self

    def with_init_script(self, init_script_path):
        """The script is applied once the wait strategy reports Cassandra as ready"""
        self.init_script_path = init_script_path
        return self

    def with_startup_attempts(self, attempts):
        if attempts < 1:
            raise ValueError("Startup attempts must be at least 1, got {0}".format(attempts))
        self.startup_attempts = attempts
        return self

    def with_startup_timeout(self, timeout):
        self.startup_timeout = timeout
        return self

    def waiting_for(self, wait_strategy):
        self.wait_strategy = wait_strategy
        return self

    def configure(self):
        self._release_override()
        self._override_mount = self._resolver.resolve(self.config_location)
        if self._override_mount is not None:
            mount = self._override_mount
            self.with_volume_mapping(mount.host_path, mount.container_path, mount.mode)

    def container_is_started(self):
        with self.get_database_delegate() as delegate:
            self._applier.apply(self.init_script_path, delegate)

    def start(self):
        self.configure()
        retrying = Retrying(
            stop=stop_after_attempt(self.startup_attempts),
            retry=retry_if_not_exception_type(ResourceLoadError),
        )
        try:
            for attempt in retrying:
                with attempt:
                    self._try_start(attempt.retry_state.attempt_number)
        except RetryError as e:
            self._release_override()
            raise ContainerLaunchError(
                f"Container startup failed for image {self.image} after {self.startup_attempts} attempt(s)"
            ) from e.last_attempt.exception()
        except ResourceLoadError:
            self._release_override()
            raise
        return self

    def _try_start(self, attempt_number):
        logger.info(f"Starting {self.image} (attempt {attempt_number}/{self.startup_attempts})")
        try:
            super().start()
            self.wait_strategy.wait_until_ready(self)
            self.container_is_started()
        except Exception as e:
            logger.warning(f"Attempt {attempt_number}/{self.startup_attempts} to start {self.image} failed: {e}")
            self._log_container_tail()
            self._discard_container()
            raise
        logger.info(f"Cassandra container {self.image} started")

    def _log_container_tail(self):
        if self._container is None:
            return
        try:
            logs = self._container.logs(tail=settings.LOG_TAIL)
        except docker.errors.APIError as e:
            logger.warning(f"Could not fetch container logs: {e}")
            return
        logger.warning("Last container log lines:\n" + logs.decode("utf-8", errors="replace"))

    def _discard_container(self):
        if self._container is None:
            return
        try:
            self._container.remove(force=True, v=True)
        except docker.errors.NotFound:
            logger.debug(f"Container {self._container.id} was already removed")
        self._container = None

    def _release_override(self):
        mount = self._override_mount
        if mount is None:
            return
        self.volumes.pop(mount.host_path, None)
        release(mount)
        self._override_mount = None

    def stop(self, force=True, delete_volume=True):
        try:
            if self._container is not None:
                super().stop(force=force, delete_volume=delete_volume)
                self._container = None
        finally:
            self._release_override()

    def get_username(self):
        """
        Default images use AllowAllAuthenticator. To authenticate with these credentials the
        configuration override has to enable PasswordAuthenticator.
        """
        return self.USERNAME

    def get_password(self):
        return self.PASSWORD

    def get_contact_point(self):
        return self.get_container_host_ip(), int(self.get_exposed_port(self.CQL_PORT))

    def get_container_ip(self, network_name=None):
        networks = self.get_wrapped_container().attrs["NetworkSettings"]["Networks"]
        if network_name:
            return networks[network_name]["IPAddress"]
        return next(iter(networks.values()))["IPAddress"]

    def get_cluster(self, **cluster_kwargs):
        return Cassandra4Container.cluster_for(self, **cluster_kwargs)

    @staticmethod
    def cluster_for(container, **cluster_kwargs):
        from cassandra.cluster import Cluster  # pylint: disable=import-outside-toplevel, no-name-in-module

        host = container.get_container_host_ip()
        port = int(container.get_exposed_port(Cassandra4Container.CQL_PORT))
        return Cluster([host], port=port, **cluster_kwargs)

    def get_database_delegate(self):
        return CassandraDatabaseDelegate(self)
