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


"""Helpers for talking to the GitHub Actions runner.

Log records become workflow commands (``::error::...``) on stderr, step
outputs and exported variables are appended to the files the runner names in
:envvar:`GITHUB_OUTPUT` and :envvar:`GITHUB_ENV`.
"""

import logging
import uuid

LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

_COMMANDS = {
    logging.DEBUG: "debug",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "error",
}


def escape_data(data: str) -> str:
    return data.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class WorkflowCommandFormatter(logging.Formatter):
    """Formats records as workflow commands, info records are left as is."""

    def format(self, record):
        message = super().format(record)
        command = _COMMANDS.get(record.levelno)
        if command is None:
            return message
        return "::{}::{}".format(command, escape_data(message))


def format_key_value(name: str, value: str) -> str:
    """Formats one entry of an output or environment file.

    Multi-line values use the heredoc form with a random delimiter.
    """
    if "\n" not in value and "\r" not in value:
        return "{}={}\n".format(name, value)

    delimiter = "ghadelimiter_{}".format(uuid.uuid4())
    return "{}<<{}\n{}\n{}\n".format(name, delimiter, value, delimiter)


def append_key_values(path: str, values: dict) -> None:
    with open(path, "a", encoding="utf-8") as file:
        for name, value in values.items():
            file.write(format_key_value(name, value))
