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

from typing import Dict

from .job_context import JobContext

LABEL_PREFIX = "kubevirt-runner.nvidia.com"
ID_LABEL = f"{LABEL_PREFIX}/id"


def identity_labels(ctx: JobContext) -> Dict[str, str]:
    """Labels put on the VM created for a job."""
    return {ID_LABEL: ctx.id}


def selector(ctx: JobContext) -> str:
    """Label selector matching exactly the labels returned by `identity_labels`."""
    return f"{ID_LABEL}={ctx.id}"
