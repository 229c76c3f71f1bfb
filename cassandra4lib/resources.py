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
import sys
from importlib.resources import files
from pathlib import Path
from typing import Iterable, Optional

from cassandra4lib import settings
from cassandra4lib.errors import ResourceNotFoundError, ResourceReadError

logger = logging.getLogger(__name__)


def normalize_resource_id(resource_id):
    return str(resource_id).replace("\\", "/").lstrip("/")


class ResourceLoader(object):
    """
    Resolves resource identifiers the way a classpath would: a relative path looked up
    against whatever the concrete loader considers its roots.
    """

    def resolve(self, resource_id) -> Path:
        raise NotImplementedError

    def read_text(self, resource_id, encoding="utf-8") -> str:
        path = self.resolve(resource_id)
        try:
            return path.read_text(encoding=encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise ResourceReadError("Could not read resource: {0}".format(resource_id), resource_id) from e


class SearchPathResourceLoader(ResourceLoader):
    def __init__(self, roots: Optional[Iterable] = None):
        if roots is None:
            roots = [entry or os.getcwd() for entry in sys.path] + settings.RESOURCE_PATH
        self.roots = [Path(root) for root in roots]

    def resolve(self, resource_id) -> Path:
        relative = normalize_resource_id(resource_id)
        if relative:
            for root in self.roots:
                if not root.is_dir():
                    continue
                candidate = root / relative
                if candidate.exists():
                    logger.debug(f"Resolved resource {resource_id} to {candidate}")
                    return candidate
        raise ResourceNotFoundError("Could not find resource: {0}".format(resource_id), resource_id)


class PackageResourceLoader(ResourceLoader):
    def __init__(self, package):
        self.package = package

    def resolve(self, resource_id) -> Path:
        relative = normalize_resource_id(resource_id)
        try:
            traversable = files(self.package)
        except (ImportError, TypeError) as e:
            raise ResourceNotFoundError("Could not find package: {0}".format(self.package), resource_id) from e
        if relative:
            traversable = traversable.joinpath(relative)
            if traversable.is_file() or traversable.is_dir():
                return Path(str(traversable))
        raise ResourceNotFoundError(
            "Could not find resource: {0} in package {1}".format(resource_id, self.package), resource_id
        )
