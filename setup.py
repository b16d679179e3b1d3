# Copyright The OpenTelemetry Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


import os

import setuptools

BASE_DIR = os.path.dirname(__file__)
VERSION_FILENAME = os.path.join(
    BASE_DIR, "src", "opentelemetry", "ci", "version.py"
)
PACKAGE_INFO = {}
with open(VERSION_FILENAME) as f:
    exec(f.read(), PACKAGE_INFO)

long_description = """
# opentelemetry-ci-trace-context

Deterministic trace IDs, span IDs and W3C `traceparent` headers derived from
CI run metadata, so trace context emitted by independent tools within the
same CI run correlates without a shared coordination service.
"""

setuptools.setup(
    name="opentelemetry-ci-trace-context",
    version=PACKAGE_INFO["__version__"],
    description="Deterministic OpenTelemetry trace context for CI runs",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="OpenTelemetry Authors",
    author_email="cncf-opentelemetry-contributors@lists.cncf.io",
    url="https://github.com/open-telemetry/opentelemetry-collector-contrib",
    license="Apache-2.0",
    package_dir={"": "src"},
    packages=setuptools.find_namespace_packages(
        where="src", include=["opentelemetry.*"]
    ),
    python_requires=">=3.8",
    install_requires=[
        "opentelemetry-api ~= 1.12",
        "opentelemetry-sdk ~= 1.12",
    ],
    extras_require={"test": ["pytest"]},
    entry_points={
        "console_scripts": [
            "opentelemetry-ci-context = opentelemetry.ci.action:run"
        ],
        "opentelemetry_id_generator": [
            "ci_run = opentelemetry.ci.id_generator:CIRunIdGenerator"
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
