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
import shutil
import tempfile
from collections import namedtuple

from cassandra4lib.errors import ResourceNotFoundError, ResourceReadError
from cassandra4lib.resources import SearchPathResourceLoader

logger = logging.getLogger(__name__)

CONTAINER_CONFIG_LOCATION = "/etc/cassandra"
STAGING_PREFIX = "cassandra4lib-conf-"

VolumeMount = namedtuple("VolumeMount", ["host_path", "container_path", "mode"])


class ConfigurationOverrideResolver(object):
    """
    Turns an optional configuration override location into a mount that replaces the
    whole configuration directory of the container.

    The override is not checked for completeness. If cassandra.yaml is missing or broken,
    Cassandra fails to start and the failure shows up as a launch error.
    """

    def __init__(self, loader=None, container_path=CONTAINER_CONFIG_LOCATION):
        self.loader = loader if loader is not None else SearchPathResourceLoader()
        self.container_path = container_path

    def resolve(self, override_location):
        if override_location is None:
            return None

        try:
            source = self.loader.resolve(override_location)
        except ResourceNotFoundError:
            logger.warning(f"Could not load configuration override: {override_location}")
            raise

        try:
            staged = stage(source)
        except OSError as e:
            logger.warning(f"Could not load configuration override: {override_location}")
            raise ResourceReadError(
                f"Could not copy configuration override: {override_location}. {e}", override_location
            ) from e
        logger.info(f"Mapping configuration override {override_location} ({staged}) to {self.container_path}")
        return VolumeMount(staged, self.container_path, "rw")


def stage(source):
    """Copy the override to a private directory, the image entrypoint edits cassandra.yaml in place"""
    staged = tempfile.mkdtemp(prefix=STAGING_PREFIX)
    try:
        if source.is_dir():
            shutil.copytree(str(source), staged, dirs_exist_ok=True)
        else:
            shutil.copy2(str(source), os.path.join(staged, source.name))
        os.chmod(staged, 0o755)
    except OSError:
        shutil.rmtree(staged, ignore_errors=True)
        raise
    return staged


def release(mount):
    if mount is None:
        return
    shutil.rmtree(mount.host_path, ignore_errors=True)
