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


from os import environ as os_environ
from typing import Optional

from opentelemetry.ci.environment_variables import TRACEPARENT
from opentelemetry.ci.ids import generate_span_id, generate_trace_id
from opentelemetry.context import Context
from opentelemetry.propagators.textmap import (
    CarrierT,
    Setter,
    default_setter,
)
from opentelemetry.trace import (
    NonRecordingSpan,
    SpanContext,
    TraceFlags,
    set_span_in_context,
)
from opentelemetry.trace.propagation.tracecontext import (
    TraceContextTextMapPropagator,
)

_trace_context_propagator = TraceContextTextMapPropagator()


def get_span_context(ci_context) -> SpanContext:
    """Builds the remote span context of a CI step."""
    trace_id = generate_trace_id(ci_context.run_id, ci_context.run_attempt)
    span_id = generate_span_id(
        ci_context.run_id,
        ci_context.run_attempt,
        ci_context.job_name,
        ci_context.step_name,
        ci_context.step_number,
    )

    if ci_context.sampled:
        trace_flags = TraceFlags.SAMPLED
    else:
        trace_flags = TraceFlags.DEFAULT

    return SpanContext(
        trace_id=int(trace_id, 16),
        span_id=int(span_id, 16),
        is_remote=True,
        trace_flags=TraceFlags(trace_flags),
    )


def set_ci_context(ci_context, context: Optional[Context] = None) -> Context:
    """Returns ``context`` with the CI step span as its current span."""
    return set_span_in_context(
        NonRecordingSpan(get_span_context(ci_context)), context
    )


def inject_ci_context(
    ci_context, carrier: CarrierT, setter: Setter = default_setter
) -> None:
    """Injects the W3C trace context headers of a CI step into ``carrier``."""
    _trace_context_propagator.inject(
        carrier, context=set_ci_context(ci_context), setter=setter
    )


def extract_environment(environ=None) -> Context:
    """Extracts the context an earlier step exported in :envvar:`TRACEPARENT`.

    Returns an empty context when the variable is missing or malformed.
    """
    if environ is None:
        environ = os_environ

    traceparent = environ.get(TRACEPARENT)
    if not traceparent:
        return Context()

    return _trace_context_propagator.extract({"traceparent": traceparent})
