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
Deterministic trace and span IDs for CI runs.

The IDs match the ones produced by the collector's GitHub Actions receiver,
so spans emitted from inside a workflow end up in the same trace as the
spans the receiver builds from the workflow webhooks.

See: https://www.w3.org/TR/trace-context-1/#traceparent-header
"""

import binascii
import hashlib
from re import compile as re_compile
from typing import Optional

TRACEPARENT_VERSION = "00"
SAMPLED_FLAGS = "01"
DEFAULT_FLAGS = "00"

TRACEPARENT_PATTERN = re_compile(r"^00-[0-9a-f]{32}-[0-9a-f]{16}-[0-9a-f]{2}$")

# Same prefix grammar as ECMAScript parseInt: whitespace, sign, optional hex
# prefix, digits. Anything after the digits is ignored. Only ECMAScript
# white space and line terminators are skipped, not everything `\s` matches.
_ecmascript_whitespace = (
    r"[\t\n\v\f\r \xa0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]"
)
_step_number_prefix = re_compile(
    _ecmascript_whitespace + r"*([+-]?)(?:0[xX]([0-9a-fA-F]+)|([0-9]+))"
)


def _sha256_hex(input_str: str) -> str:
    hashed = hashlib.sha256(input_str.encode()).digest()
    return binascii.hexlify(hashed).decode()


def _parse_step_number(step_number: str) -> Optional[int]:
    match = _step_number_prefix.match(step_number)
    if match is None:
        return None

    sign, hex_digits, digits = match.groups()
    if hex_digits is not None:
        value = int(hex_digits, 16)
    else:
        value = int(digits)

    return -value if sign == "-" else value


def _has_step_number(step_number) -> bool:
    if step_number is None:
        return False

    step_number = str(step_number)
    if not step_number:
        return False

    value = _parse_step_number(step_number)
    return value is not None and value > 0


def generate_trace_id(run_id, run_attempt) -> str:
    """Returns the 32 hex character trace ID of a workflow run attempt.

    The trailing ``t`` keeps trace ID inputs apart from span ID inputs.
    """
    input_str = f"{run_id}{run_attempt}t"
    return _sha256_hex(input_str)[:32]


def generate_parent_span_id(job_id, run_attempt) -> str:
    """Returns the 16 hex character span ID of a job, as used for the
    parent of its step spans by the GitHub Actions receiver."""
    input_str = f"{job_id}{run_attempt}s"
    return _sha256_hex(input_str)[:16]


def generate_span_id(
    run_id, run_attempt, job_name, step_name, step_number=None
) -> str:
    """Returns the 16 hex character span ID of a step.

    ``step_number`` only takes part when it parses to an integer greater than
    zero, otherwise the result is the same as if it had not been given. The
    ID is taken from the second 8 bytes of the digest.
    """
    if _has_step_number(step_number):
        input_str = f"{run_id}{run_attempt}{job_name}{step_name}{step_number}"
    else:
        input_str = f"{run_id}{run_attempt}{job_name}{step_name}"

    return _sha256_hex(input_str)[16:32]


def generate_traceparent(
    trace_id: str, span_id: str, sampled: bool = True
) -> str:
    """Formats a W3C ``traceparent`` header value.

    ``trace_id`` and ``span_id`` are used as given.
    """
    trace_flags = SAMPLED_FLAGS if sampled else DEFAULT_FLAGS
    return "-".join([TRACEPARENT_VERSION, trace_id, span_id, trace_flags])
