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

# type: ignore

import os
import tempfile
from io import StringIO
from unittest import TestCase
from unittest.mock import patch

from opentelemetry.ci import action
from opentelemetry.ci.action import (
    CIContext,
    MissingCIContextError,
    generate,
    load_ci_context,
    parse_args,
    publish,
)
from opentelemetry.ci.ids import (
    TRACEPARENT_PATTERN,
    generate_span_id,
    generate_trace_id,
)

GITHUB_ENVIRON = {
    "GITHUB_RUN_ID": "12345",
    "GITHUB_RUN_ATTEMPT": "1",
    "GITHUB_JOB": "build",
    "GITHUB_ACTION": "test",
}


class TestLoadCIContext(TestCase):
    def test_from_environment(self):
        self.assertEqual(
            load_ci_context(environ=GITHUB_ENVIRON),
            CIContext(
                run_id="12345",
                run_attempt="1",
                job_name="build",
                step_name="test",
                step_number="",
                sampled=True,
            ),
        )

    def test_run_attempt_default(self):
        environ = dict(GITHUB_ENVIRON)
        del environ["GITHUB_RUN_ATTEMPT"]
        self.assertEqual(load_ci_context(environ=environ).run_attempt, "1")

    def test_step_overrides(self):
        environ = dict(
            GITHUB_ENVIRON,
            OTEL_CI_STEP_NAME="lint",
            OTEL_CI_STEP_NUMBER="3",
            OTEL_CI_SAMPLED="False",
        )
        ci_context = load_ci_context(environ=environ)
        self.assertEqual(ci_context.step_name, "lint")
        self.assertEqual(ci_context.step_number, "3")
        self.assertFalse(ci_context.sampled)

    def test_arguments_take_precedence(self):
        args = parse_args(
            [
                "--run-id",
                "67890",
                "--run-attempt",
                "2",
                "--job-name",
                "deploy",
                "--step-name",
                "release",
                "--step-number",
                "4",
                "--not-sampled",
            ]
        )
        self.assertEqual(
            load_ci_context(args, environ=GITHUB_ENVIRON),
            CIContext(
                run_id="67890",
                run_attempt="2",
                job_name="deploy",
                step_name="release",
                step_number="4",
                sampled=False,
            ),
        )

    def test_arguments_without_environment(self):
        args = parse_args(
            ["--run-id", "1", "--job-name", "build", "--step-name", "test"]
        )
        ci_context = load_ci_context(args, environ={})
        self.assertEqual(ci_context.run_attempt, "1")
        self.assertTrue(ci_context.sampled)

    def test_missing_fields(self):
        with self.assertRaises(MissingCIContextError) as error:
            load_ci_context(environ={"GITHUB_JOB": "build"})

        self.assertEqual(error.exception.missing, ("run_id", "step_name"))
        self.assertEqual(
            str(error.exception),
            "Missing required CI context: run_id (--run-id or GITHUB_RUN_ID), "
            "step_name (--step-name or OTEL_CI_STEP_NAME or GITHUB_ACTION)",
        )

    def test_missing_fields_is_value_error(self):
        with self.assertRaises(ValueError):
            load_ci_context(environ={})


class TestGenerate(TestCase):
    def test_generate(self):
        outputs = generate(load_ci_context(environ=GITHUB_ENVIRON))

        trace_id = generate_trace_id("12345", "1")
        span_id = generate_span_id("12345", "1", "build", "test")
        self.assertEqual(
            outputs,
            {
                "trace-id": trace_id,
                "span-id": span_id,
                "traceparent": "00-{}-{}-01".format(trace_id, span_id),
            },
        )

    def test_generate_not_sampled(self):
        ci_context = load_ci_context(
            environ=dict(GITHUB_ENVIRON, OTEL_CI_SAMPLED="false")
        )
        traceparent = generate(ci_context)["traceparent"]
        self.assertRegex(traceparent, TRACEPARENT_PATTERN)
        self.assertTrue(traceparent.endswith("-00"))

    def test_generate_with_step_number(self):
        ci_context = load_ci_context(
            environ=dict(GITHUB_ENVIRON, OTEL_CI_STEP_NUMBER="5")
        )
        self.assertEqual(generate(ci_context)["span-id"], "51cc682bed7bb5b3")


class TestPublish(TestCase):

    outputs = {
        "trace-id": "0af7651916cd43dd8448eb211c80319c",
        "span-id": "b9c7c989f97918e1",
        "traceparent": "00-0af7651916cd43dd8448eb211c80319c-b9c7c989f97918e1-01",
    }

    def setUp(self):
        self.directory = tempfile.TemporaryDirectory()
        self.output_path = os.path.join(self.directory.name, "output")
        self.env_path = os.path.join(self.directory.name, "env")

    def tearDown(self):
        self.directory.cleanup()

    def read(self, path):
        with open(path, encoding="utf-8") as file:
            return file.read()

    def test_github_files(self):
        stream = StringIO()
        publish(
            self.outputs,
            environ={
                "GITHUB_OUTPUT": self.output_path,
                "GITHUB_ENV": self.env_path,
            },
            stream=stream,
        )

        self.assertEqual(
            self.read(self.output_path),
            "trace-id=0af7651916cd43dd8448eb211c80319c\n"
            "span-id=b9c7c989f97918e1\n"
            "traceparent=00-0af7651916cd43dd8448eb211c80319c-b9c7c989f97918e1-01\n",
        )
        self.assertEqual(
            self.read(self.env_path),
            "TRACE_ID=0af7651916cd43dd8448eb211c80319c\n"
            "SPAN_ID=b9c7c989f97918e1\n"
            "TRACEPARENT=00-0af7651916cd43dd8448eb211c80319c-b9c7c989f97918e1-01\n",
        )
        self.assertEqual(stream.getvalue(), "")

    def test_stdout_fallback(self):
        stream = StringIO()
        publish(self.outputs, environ={}, stream=stream)

        self.assertEqual(
            stream.getvalue(),
            "export TRACE_ID=0af7651916cd43dd8448eb211c80319c\n"
            "export SPAN_ID=b9c7c989f97918e1\n"
            "export TRACEPARENT=00-0af7651916cd43dd8448eb211c80319c-b9c7c989f97918e1-01\n",
        )
        self.assertFalse(os.path.exists(self.output_path))


class TestRun(TestCase):
    def setUp(self):
        self.directory = tempfile.TemporaryDirectory()
        self.output_path = os.path.join(self.directory.name, "output")
        self.env_path = os.path.join(self.directory.name, "env")

    def tearDown(self):
        self.directory.cleanup()

    @patch("sys.argv", ["opentelemetry-ci-context"])
    def test_run(self):
        environ = dict(
            GITHUB_ENVIRON,
            GITHUB_OUTPUT=self.output_path,
            GITHUB_ENV=self.env_path,
        )
        with patch.dict("os.environ", environ, clear=True):
            with self.assertLogs("opentelemetry.ci.action", "INFO") as logs:
                action.run()

        trace_id = generate_trace_id("12345", "1")
        with open(self.output_path, encoding="utf-8") as file:
            self.assertIn("trace-id={}\n".format(trace_id), file.read())
        with open(self.env_path, encoding="utf-8") as file:
            self.assertIn("TRACE_ID={}\n".format(trace_id), file.read())
        self.assertIn(
            "INFO:opentelemetry.ci.action:Generated TRACE_ID: {}".format(
                trace_id
            ),
            logs.output,
        )

    @patch("sys.argv", ["opentelemetry-ci-context", "--step-name", "lint"])
    def test_run_stdout(self):
        with patch.dict("os.environ", GITHUB_ENVIRON, clear=True):
            with patch("sys.stdout", new_callable=StringIO) as stdout:
                action.run()

        span_id = generate_span_id("12345", "1", "build", "lint")
        self.assertIn("export SPAN_ID={}\n".format(span_id), stdout.getvalue())

    @patch(
        "sys.argv", ["opentelemetry-ci-context", "--log-level", "debug"]
    )
    def test_run_logs_to_stderr(self):
        with patch.dict("os.environ", GITHUB_ENVIRON, clear=True):
            with patch("sys.stdout", new_callable=StringIO) as stdout:
                with patch("sys.stderr", new_callable=StringIO) as stderr:
                    action.run()

        for line in stdout.getvalue().splitlines():
            self.assertTrue(line.startswith("export "), line)
        self.assertIn("::debug::Context - run_id: 12345", stderr.getvalue())
        self.assertIn("Generated TRACEPARENT: 00-", stderr.getvalue())

    @patch("sys.argv", ["opentelemetry-ci-context"])
    @patch.dict("os.environ", {"GITHUB_RUN_ID": "12345"}, clear=True)
    def test_run_missing_context(self):
        with patch("opentelemetry.ci.action.generate") as generate_mock:
            with self.assertLogs("opentelemetry.ci.action", "ERROR") as logs:
                with self.assertRaises(SystemExit) as exit_info:
                    action.run()

        self.assertEqual(exit_info.exception.code, 1)
        self.assertIn("job_name (--job-name or GITHUB_JOB)", logs.output[0])
        generate_mock.assert_not_called()
