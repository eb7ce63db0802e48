# SPDX-FileCopyrightText: NVIDIA CORPORATION & AFFILIATES
# Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
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

from typing import Any


class VMError(Exception):
    """Base class for errors raised while provisioning or locating a job VM."""

    pass


class ResourceSpecInvalidError(VMError):
    """
    Exception raised when a CPU or memory quantity of a job cannot be parsed.

    Attributes
        field (str): The offending field, e.g. 'cpu.request'.
        value (str): The raw quantity string.
        cause (Exception): The error reported by the quantity parser.
    """

    def __init__(self, field: str, value: str, cause: Exception):
        """
        Initialize a ResourceSpecInvalidError instance.

        Args:
            field (str): The offending field, e.g. 'cpu.request'.
            value (str): The raw quantity string.
            cause (Exception): The error reported by the quantity parser.
        """
        self.field = field
        self.value = value
        self.cause = cause
        super().__init__(f"parsing {field}: {cause}")


class MissingImageError(VMError):
    """
    Exception raised when a job does not name a containerdisk image.

    Attributes
        job_id (str): The ID of the job.
    """

    def __init__(self, job_id: str):
        self.job_id = job_id
        super().__init__("must specify a containerdisk image")


class InstanceVanishedError(VMError):
    """
    Exception raised when no VM instance carries the ID of a job.

    The VM of a job is expected to exist for as long as it is looked up, so zero matches is an anomaly and not an
    ordinary "not found".

    Attributes
        job_id (str): The ID of the job.
    """

    def __init__(self, job_id: str):
        self.job_id = job_id
        super().__init__(f"Virtual Machine instance disappeared while the job was running! (ID: {job_id})")


class AmbiguousInstanceError(VMError):
    """
    Exception raised when more than one VM instance carries the ID of a job.

    Attributes
        job_id (str): The ID of the job.
        count (int): The number of matching instances.
    """

    def __init__(self, job_id: str, count: int):
        self.job_id = job_id
        self.count = count
        super().__init__(f"Virtual Machine instance has ambiguous ID! {count} instances found with ID {job_id}")


class JobContextParsingError(Exception):
    """Exception raised for errors during job context file parsing."""

    pass


def format_validation_error(err: Any) -> str:
    """
    Format a single pydantic validation error entry for logging.

    Args:
        err: One entry of `ValidationError.errors()`.

    Returns:
        str: A human readable description of the error.
    """
    loc = ".".join(str(part) for part in err.get("loc", ()))
    msg = err.get("msg", "")
    if err.get("type") == "missing":
        return f"Field '{loc}': {msg}"
    if "input" in err:
        return f"Field '{loc}' with value '{err['input']}' is invalid: {msg}"
    return f"Field '{loc}': {msg}"
