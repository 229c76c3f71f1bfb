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


class Cassandra4Error(Exception):
    pass


class ContainerLaunchError(Cassandra4Error):
    """Raised when the container could not be started within the configured attempts"""


class ResourceLoadError(Cassandra4Error):
    def __init__(self, message, resource_id=None):
        Cassandra4Error.__init__(self, message)
        self.resource_id = resource_id


class ResourceNotFoundError(ResourceLoadError):
    pass


class ResourceReadError(ResourceLoadError):
    pass


class ScriptError(Cassandra4Error):
    pass


class ScriptParseError(ScriptError):
    def __init__(self, message, script_path=None, line_number=None):
        ScriptError.__init__(self, message)
        self.script_path = script_path
        self.line_number = line_number


class ScriptStatementFailedError(ScriptError):
    def __init__(self, statement, line_number, script_path, index=None):
        ScriptError.__init__(self, "Script execution failed ({0}:{1}): {2}".format(script_path, line_number, statement))
        self.statement = statement
        self.line_number = line_number
        self.script_path = script_path
        self.index = index


class UncategorizedScriptError(Cassandra4Error):
    """Wraps any ScriptError raised while applying an init script"""
