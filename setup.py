#!/usr/bin/env python3
# vi: syntax=python
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

from setuptools import setup

setup(name='cassandra4lib',
      version='1.0',
      description='Cassandra test container library',
      license='Apache License, Version 2.0',
      packages=['cassandra4lib'],
      python_requires='>=3.9',
      install_requires=['testcontainers>=4.4',
                        'docker>=7.0',
                        'cassandra-driver>=3.29.2',
                        'tenacity>=8.0'],
      extras_require={'test': ['pytest>=7.0',
                               'pyyaml',
                               'behave',
                               'gevent']})
