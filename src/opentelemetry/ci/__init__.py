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
Installation
------------

::

    pip install opentelemetry-ci-trace-context

CI Trace Context
----------------

Derives the trace ID, span ID and W3C ``traceparent`` of a CI step from the
workflow run metadata alone. Every tool started within the same run attempt
computes the same trace ID, so their spans correlate without any shared
coordination service.

Usage
-----

.. code-block:: python

    from opentelemetry.ci import (
        generate_span_id,
        generate_trace_id,
        generate_traceparent,
    )

    trace_id = generate_trace_id("12345", "1")
    span_id = generate_span_id("12345", "1", "build", "test")
    traceparent = generate_traceparent(trace_id, span_id)

In a workflow, run the ``opentelemetry-ci-context`` command to publish the
values as step outputs and as the ``TRACE_ID``, ``SPAN_ID`` and
``TRACEPARENT`` variables.

API
---
"""

from opentelemetry.ci.ids import (
    TRACEPARENT_PATTERN,
    generate_parent_span_id,
    generate_span_id,
    generate_trace_id,
    generate_traceparent,
)
from opentelemetry.ci.version import __version__

__all__ = [
    "TRACEPARENT_PATTERN",
    "generate_parent_span_id",
    "generate_span_id",
    "generate_trace_id",
    "generate_traceparent",
    "__version__",
]
