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

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import toml
from pydantic import ValidationError

from .core import JobContext, JobContextParsingError, format_validation_error


def parse_job_context(job_config_path: Path, overrides: Optional[Dict[str, Any]] = None) -> JobContext:
    """
    Parse a job context from a TOML file.

    Args:
        job_config_path (Path): Path to the TOML file.
        overrides (Optional[Dict[str, Any]]): Values replacing the ones from the file. `None` values are ignored.

    Returns:
        JobContext: The validated job context.

    Raises:
        FileNotFoundError: If the file does not exist.
        JobContextParsingError: If the file is not valid TOML or does not describe a valid job.
    """
    if not job_config_path.is_file():
        raise FileNotFoundError(f"Job config '{job_config_path}' not found.")

    with job_config_path.open() as f:
        logging.debug(f"Opened job config file: {job_config_path}")
        try:
            data: Dict[str, Any] = toml.load(f)
        except toml.TomlDecodeError as e:
            logging.error(f"Failed to parse job config {job_config_path}: {e}")
            raise JobContextParsingError(f"Failed to parse job config {job_config_path}") from e

    for key, value in (overrides or {}).items():
        if value is not None:
            data[key] = value

    try:
        return JobContext.model_validate(data)
    except ValidationError as e:
        logging.error(f"Failed to parse job definition: {job_config_path}")
        for err in e.errors(include_url=False):
            logging.error(format_validation_error(err))
        raise JobContextParsingError("Failed to parse job definition") from e
