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

from cassandra4lib.errors import ScriptStatementFailedError
from cassandra4lib.scripts import ScriptStatement

logger = logging.getLogger(__name__)


class DatabaseDelegate(object):
    """Submits statements to a running database, one at a time and in order."""

    def execute_statement(self, statement, script_path, line_number):
        raise NotImplementedError

    def close(self):
        pass

    def execute(self, statements, script_path, continue_on_error=False, ignore_failed_drops=False):
        for position, statement in enumerate(statements):
            if not isinstance(statement, ScriptStatement):
                statement = ScriptStatement(position, position + 1, statement)
            try:
                self.execute_statement(statement.text, script_path, statement.line_number)
            except ScriptStatementFailedError as e:
                if e.index is None:
                    e.index = statement.index
                is_drop = statement.text.lstrip().upper().startswith("DROP")
                if continue_on_error:
                    logger.warning(f"Ignoring failed statement #{statement.index} in {script_path}: {statement.text}")
                elif is_drop and ignore_failed_drops:
                    logger.debug(f"Ignoring failed drop statement #{statement.index} in {script_path}: {statement.text}")
                else:
                    raise

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


class CassandraDatabaseDelegate(DatabaseDelegate):
    def __init__(self, container):
        self.container = container
        self._cluster = None
        self._session = None

    @property
    def session(self):
        if self._session is None:
            self._cluster = self.container.get_cluster()
            self._session = self._cluster.connect()
        return self._session

    def execute_statement(self, statement, script_path, line_number):
        try:
            result = self.session.execute(statement)
        except Exception as e:  # pylint: disable=broad-except
            raise ScriptStatementFailedError(statement, line_number, script_path) from e

        if result.column_names and result.column_names[0] == "[applied]":
            row = result.one()
            if row is not None and not row[0]:
                raise ScriptStatementFailedError(statement, line_number, script_path)
        logger.debug(f"Statement {script_path}:{line_number} was applied: {statement}")

    def close(self):
        if self._session is not None:
            self._session.shutdown()
            self._session = None
        if self._cluster is not None:
            self._cluster.shutdown()
            self._cluster = None
