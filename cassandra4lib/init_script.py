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

from cassandra4lib.errors import ResourceNotFoundError, ResourceReadError, ScriptError, UncategorizedScriptError
from cassandra4lib.resources import SearchPathResourceLoader
from cassandra4lib.scripts import execute_database_script

logger = logging.getLogger(__name__)

SCRIPT_ENCODING = "utf-8"


class InitScriptApplier(object):
    """
    Loads a CQL init script and applies it through a database delegate.

    The script is read again on every call; a start attempt that is retried executes the
    whole script from its first statement.
    """

    def __init__(self, loader=None):
        self.loader = loader if loader is not None else SearchPathResourceLoader()

    def apply(self, script_path, delegate):
        if script_path is None:
            return

        cql = self.load(script_path)
        try:
            execute_database_script(delegate, script_path, cql)
        except ScriptError as e:
            logger.error(f"Error while executing init script: {script_path}", exc_info=True)
            raise UncategorizedScriptError("Error while executing init script: {0}".format(script_path)) from e

    def load(self, script_path):
        try:
            return self.loader.read_text(script_path, encoding=SCRIPT_ENCODING)
        except ResourceNotFoundError as e:
            logger.warning(f"Could not load init script: {script_path}")
            raise ResourceNotFoundError(
                "Could not load init script: {0}. Resource not found.".format(script_path), script_path
            ) from e
        except ResourceReadError as e:
            logger.warning(f"Could not load init script: {script_path}")
            raise ResourceReadError("Could not load init script: {0}".format(script_path), script_path) from e
