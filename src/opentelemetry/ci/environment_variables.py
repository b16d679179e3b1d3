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


GITHUB_RUN_ID = "GITHUB_RUN_ID"
"""
.. envvar:: GITHUB_RUN_ID

Unique number of the workflow run, set by GitHub Actions.
"""

GITHUB_RUN_ATTEMPT = "GITHUB_RUN_ATTEMPT"
"""
.. envvar:: GITHUB_RUN_ATTEMPT

Attempt number of the workflow run, starting at 1.
"""

GITHUB_JOB = "GITHUB_JOB"
"""
.. envvar:: GITHUB_JOB

Job ID of the current job.
"""

GITHUB_ACTION = "GITHUB_ACTION"
"""
.. envvar:: GITHUB_ACTION

Name of the action currently running, or the ID of the step.
"""

GITHUB_OUTPUT = "GITHUB_OUTPUT"
"""
.. envvar:: GITHUB_OUTPUT

Path of the file that step outputs are appended to.
"""

GITHUB_ENV = "GITHUB_ENV"
"""
.. envvar:: GITHUB_ENV

Path of the file that variables exported to later steps are appended to.
"""

OTEL_CI_STEP_NAME = "OTEL_CI_STEP_NAME"
"""
.. envvar:: OTEL_CI_STEP_NAME

Step name used for the span ID. Takes precedence over :envvar:`GITHUB_ACTION`.
"""

OTEL_CI_STEP_NUMBER = "OTEL_CI_STEP_NUMBER"
"""
.. envvar:: OTEL_CI_STEP_NUMBER

Optional step number used for the span ID. Ignored unless greater than 0.
"""

OTEL_CI_SAMPLED = "OTEL_CI_SAMPLED"
"""
.. envvar:: OTEL_CI_SAMPLED

Set to ``false`` to clear the sampled flag of the generated ``traceparent``.
The default value is ``true``.
"""

OTEL_CI_LOG_LEVEL = "OTEL_CI_LOG_LEVEL"
"""
.. envvar:: OTEL_CI_LOG_LEVEL

Log level of the ``opentelemetry-ci-context`` command, one of ``debug``,
``info``, ``warning`` or ``error``. The default value is ``info``.
"""

TRACEPARENT = "TRACEPARENT"
"""
.. envvar:: TRACEPARENT

W3C ``traceparent`` exported for later steps.
"""

TRACE_ID = "TRACE_ID"
SPAN_ID = "SPAN_ID"
