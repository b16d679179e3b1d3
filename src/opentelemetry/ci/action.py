#!/usr/bin/env python3

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
Exposes the trace context of a CI step to the rest of the job.

The ``opentelemetry-ci-context`` command derives the trace ID, span ID and
``traceparent`` of the current step from the workflow run metadata and
publishes them as the step outputs ``trace-id``, ``span-id`` and
``traceparent``, and as the variables ``TRACE_ID``, ``SPAN_ID`` and
``TRACEPARENT`` for later steps.

Outside GitHub Actions, where :envvar:`GITHUB_ENV` is not set, the variables
are printed as ``export`` statements::

    eval "$(opentelemetry-ci-context --run-id 42 --job-name ci --step-name x)"
"""

import argparse
import logging
import sys
from collections import namedtuple
from os import environ as os_environ

from opentelemetry.ci.environment_variables import (
    GITHUB_ACTION,
    GITHUB_ENV,
    GITHUB_JOB,
    GITHUB_OUTPUT,
    GITHUB_RUN_ATTEMPT,
    GITHUB_RUN_ID,
    OTEL_CI_LOG_LEVEL,
    OTEL_CI_SAMPLED,
    OTEL_CI_STEP_NAME,
    OTEL_CI_STEP_NUMBER,
    SPAN_ID,
    TRACE_ID,
    TRACEPARENT,
)
from opentelemetry.ci.ids import (
    generate_span_id,
    generate_trace_id,
    generate_traceparent,
)
from opentelemetry.ci.version import __version__
from opentelemetry.ci.workflow_commands import (
    LEVELS,
    WorkflowCommandFormatter,
    append_key_values,
)

logger = logging.getLogger(__name__)

CIContext = namedtuple(
    "CIContext",
    [
        "run_id",
        "run_attempt",
        "job_name",
        "step_name",
        "step_number",
        "sampled",
    ],
)

# Field name and the sources it is resolved from, in order of precedence.
_REQUIRED_FIELDS = (
    ("run_id", ("--run-id", GITHUB_RUN_ID)),
    ("run_attempt", ("--run-attempt", GITHUB_RUN_ATTEMPT)),
    ("job_name", ("--job-name", GITHUB_JOB)),
    ("step_name", ("--step-name", OTEL_CI_STEP_NAME, GITHUB_ACTION)),
)

_EXPORTED_VARIABLES = {
    "trace-id": TRACE_ID,
    "span-id": SPAN_ID,
    "traceparent": TRACEPARENT,
}

_handler = None


class MissingCIContextError(ValueError):
    """Raised when required identifying fields of the CI run are missing."""

    def __init__(self, missing):
        self.missing = tuple(missing)
        sources = dict(_REQUIRED_FIELDS)
        super().__init__(
            "Missing required CI context: {}".format(
                ", ".join(
                    "{} ({})".format(field, " or ".join(sources[field]))
                    for field in self.missing
                )
            )
        )


def parse_args(args=None):
    parser = argparse.ArgumentParser(
        description="""
        opentelemetry-ci-context derives the trace ID, span ID and W3C
        traceparent of the current CI step and publishes them to the rest
        of the job.
        """
    )

    parser.add_argument(
        "--run-id",
        help="Workflow run ID. Defaults to ${}.".format(GITHUB_RUN_ID),
    )
    parser.add_argument(
        "--run-attempt",
        help="Workflow run attempt. Defaults to ${} or 1.".format(
            GITHUB_RUN_ATTEMPT
        ),
    )
    parser.add_argument(
        "--job-name", help="Job name. Defaults to ${}.".format(GITHUB_JOB),
    )
    parser.add_argument(
        "--step-name",
        help="Step name. Defaults to ${} or ${}.".format(
            OTEL_CI_STEP_NAME, GITHUB_ACTION
        ),
    )
    parser.add_argument(
        "--step-number",
        help="""
        Optional step number, only used when greater than 0.
        Defaults to ${}.
        """.format(
            OTEL_CI_STEP_NUMBER
        ),
    )
    parser.add_argument(
        "--not-sampled",
        action="store_true",
        help="Clear the sampled flag of the traceparent.",
    )
    parser.add_argument(
        "--log-level",
        choices=sorted(LEVELS),
        help="Defaults to ${} or info.".format(OTEL_CI_LOG_LEVEL),
    )
    parser.add_argument(
        "--version", action="version", version=__version__,
    )
    return parser.parse_args(args)


def _first(*values):
    for value in values:
        if value:
            return value
    return ""


def load_ci_context(args=None, environ=None) -> CIContext:
    """Resolves the CI context from command line arguments and environment.

    Raises:
        MissingCIContextError: if any of the run ID, run attempt, job name or
            step name is missing.
    """
    if environ is None:
        environ = os_environ

    ci_context = CIContext(
        run_id=_first(
            getattr(args, "run_id", None), environ.get(GITHUB_RUN_ID)
        ),
        run_attempt=_first(
            getattr(args, "run_attempt", None),
            environ.get(GITHUB_RUN_ATTEMPT),
            "1",
        ),
        job_name=_first(
            getattr(args, "job_name", None), environ.get(GITHUB_JOB)
        ),
        step_name=_first(
            getattr(args, "step_name", None),
            environ.get(OTEL_CI_STEP_NAME),
            environ.get(GITHUB_ACTION),
        ),
        step_number=_first(
            getattr(args, "step_number", None),
            environ.get(OTEL_CI_STEP_NUMBER),
        ),
        sampled=not (
            getattr(args, "not_sampled", False)
            or environ.get(OTEL_CI_SAMPLED, "true").lower() == "false"
        ),
    )

    missing = [
        field
        for field, _ in _REQUIRED_FIELDS
        if not getattr(ci_context, field)
    ]
    if missing:
        raise MissingCIContextError(missing)

    return ci_context


def generate(ci_context: CIContext) -> dict:
    trace_id = generate_trace_id(ci_context.run_id, ci_context.run_attempt)
    span_id = generate_span_id(
        ci_context.run_id,
        ci_context.run_attempt,
        ci_context.job_name,
        ci_context.step_name,
        ci_context.step_number,
    )
    traceparent = generate_traceparent(
        trace_id, span_id, sampled=ci_context.sampled
    )
    return {
        "trace-id": trace_id,
        "span-id": span_id,
        "traceparent": traceparent,
    }


def publish(outputs: dict, environ=None, stream=None) -> None:
    """Publishes generated IDs as step outputs and exported variables.

    Step outputs are skipped when :envvar:`GITHUB_OUTPUT` is not set, exported
    variables are written to ``stream`` (stdout by default) as ``export``
    statements when :envvar:`GITHUB_ENV` is not set.
    """
    if environ is None:
        environ = os_environ
    if stream is None:
        stream = sys.stdout

    variables = {
        _EXPORTED_VARIABLES[name]: value for name, value in outputs.items()
    }

    output_path = environ.get(GITHUB_OUTPUT)
    if output_path:
        append_key_values(output_path, outputs)
    else:
        logger.debug("%s is not set, skipping step outputs", GITHUB_OUTPUT)

    env_path = environ.get(GITHUB_ENV)
    if env_path:
        append_key_values(env_path, variables)
    else:
        for name, value in variables.items():
            stream.write("export {}={}\n".format(name, value))


def _configure_logging(log_level):
    global _handler  # pylint: disable=global-statement

    ci_logger = logging.getLogger("opentelemetry.ci")
    if _handler is not None:
        ci_logger.removeHandler(_handler)

    _handler = logging.StreamHandler()
    _handler.setFormatter(WorkflowCommandFormatter())
    ci_logger.addHandler(_handler)
    ci_logger.setLevel(LEVELS.get((log_level or "").lower(), logging.INFO))


def run() -> None:
    args = parse_args()
    _configure_logging(args.log_level or os_environ.get(OTEL_CI_LOG_LEVEL))

    try:
        ci_context = load_ci_context(args)
    except MissingCIContextError as exc:
        logger.error("%s", exc)
        sys.exit(1)

    logger.debug(
        "Context - run_id: %s, run_attempt: %s, job_name: %s, "
        "step_name: %s, step_number: %s",
        ci_context.run_id,
        ci_context.run_attempt,
        ci_context.job_name,
        ci_context.step_name,
        ci_context.step_number,
    )

    outputs = generate(ci_context)
    publish(outputs)

    for name, value in outputs.items():
        logger.info("Generated %s: %s", _EXPORTED_VARIABLES[name], value)


if __name__ == "__main__":
    run()
