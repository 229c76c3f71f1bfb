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

import os


def _split(value, separator):
    return [item.strip() for item in value.split(separator) if item.strip()]


def load():
    # pylint: disable=global-statement, global-variable-undefined
    # fmt:off
    global CASSANDRA_IMAGE, STARTUP_ATTEMPTS, STARTUP_TIMEOUT, QUERY_WAIT_INTERVAL, \
        RESOURCE_PATH, COMPATIBLE_IMAGES, LOG_TAIL
    # fmt:on

    CASSANDRA_IMAGE = os.environ.get("CASSANDRA_IMAGE", "cassandra:3.11.2")
    STARTUP_ATTEMPTS = int(os.environ.get("CASSANDRA_STARTUP_ATTEMPTS", "3"))
    STARTUP_TIMEOUT = float(os.environ.get("CASSANDRA_STARTUP_TIMEOUT", "120"))
    QUERY_WAIT_INTERVAL = float(os.environ.get("CASSANDRA_QUERY_WAIT_INTERVAL", "1"))
    RESOURCE_PATH = _split(os.environ.get("CASSANDRA4LIB_RESOURCE_PATH", ""), os.pathsep)
    COMPATIBLE_IMAGES = _split(os.environ.get("CASSANDRA_COMPATIBLE_IMAGES", ""), ",")
    LOG_TAIL = int(os.environ.get("CASSANDRA_LOG_TAIL", "50"))


load()
