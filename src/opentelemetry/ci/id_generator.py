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


"""
CI Run IDs Generator
--------------------

The **CI Run IDs Generator** makes every span created by the OpenTelemetry SDK
inside a workflow run share that run's trace ID, so tools started from
different steps report into a single trace.

Usage
-----

Select it through the SDK configurator:

::

    export OTEL_PYTHON_ID_GENERATOR=ci_run

or pass it to the ``TracerProvider``:

.. code-block:: python

    import opentelemetry.trace as trace
    from opentelemetry.ci.id_generator import CIRunIdGenerator
    from opentelemetry.sdk.trace import TracerProvider

    trace.set_tracer_provider(
        TracerProvider(id_generator=CIRunIdGenerator())
    )

API
---
"""

from logging import getLogger
from os import environ

from opentelemetry.ci.environment_variables import (
    GITHUB_RUN_ATTEMPT,
    GITHUB_RUN_ID,
)
from opentelemetry.ci.ids import generate_trace_id
from opentelemetry.sdk.trace.id_generator import IdGenerator, RandomIdGenerator

logger = getLogger(__name__)


class CIRunIdGenerator(IdGenerator):
    """Generates the trace ID of the current CI run and random span IDs.

    Args:
        run_id: Workflow run ID, read from :envvar:`GITHUB_RUN_ID` if not
            given.
        run_attempt: Workflow run attempt, read from
            :envvar:`GITHUB_RUN_ATTEMPT` if not given, defaults to ``1``.

    Outside a CI run, trace IDs are random.
    """

    random_id_generator = RandomIdGenerator()

    def __init__(self, run_id=None, run_attempt=None):
        if run_id is None:
            run_id = environ.get(GITHUB_RUN_ID, "")
        if run_attempt is None:
            run_attempt = environ.get(GITHUB_RUN_ATTEMPT, "1")

        self._trace_id = None
        if run_id:
            self._trace_id = int(generate_trace_id(run_id, run_attempt), 16)
        else:
            logger.warning(
                "%s is not set, generating random trace IDs", GITHUB_RUN_ID
            )

    def generate_span_id(self) -> int:
        return self.random_id_generator.generate_span_id()

    def generate_trace_id(self) -> int:
        if self._trace_id is None:
            return self.random_id_generator.generate_trace_id()
        return self._trace_id
