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

from pathlib import Path

import pytest
import toml

from kubevirt_runner import InMemoryInstanceClient, JobContext


@pytest.fixture
def job_ctx() -> JobContext:
    return JobContext(
        id="job-1",
        base_name="runner-",
        namespace="ci",
        cpu_request="250m",
        cpu_limit="500m",
        memory_request="256Mi",
        memory_limit="512Mi",
        image="registry/test:latest",
        image_pull_policy="IfNotPresent",
        machine_type="q35",
    )


@pytest.fixture
def client() -> InMemoryInstanceClient:
    return InMemoryInstanceClient(seed=0)


@pytest.fixture
def job_config(tmp_path: Path, job_ctx: JobContext) -> Path:
    path = tmp_path / "job.toml"
    with path.open("w") as f:
        toml.dump(job_ctx.model_dump(), f)
    return path
