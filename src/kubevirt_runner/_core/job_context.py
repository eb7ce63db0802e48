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

from typing import Literal

from pydantic import BaseModel, ConfigDict

ImagePullPolicy = Literal["Always", "IfNotPresent", "Never"]


class JobContext(BaseModel):
    """
    Description of a single job that needs a VM.

    Attributes
        id (str): Unique ID of the job invocation, the only key correlating a job with its VM.
        base_name (str): Prefix for the VM name, the cluster appends a unique suffix.
        namespace (str): Namespace the VM lives in.
        cpu_request (str): CPU request quantity, e.g. '500m'.
        cpu_limit (str): CPU limit quantity.
        memory_request (str): Memory request quantity, e.g. '2Gi'.
        memory_limit (str): Memory limit quantity.
        image (str): Containerdisk image the VM boots from.
        image_pull_policy (str): One of 'Always', 'IfNotPresent', 'Never'.
        machine_type (str): Virtual hardware profile, passed to the cluster verbatim.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    base_name: str = "runner-"
    namespace: str = "default"
    cpu_request: str
    cpu_limit: str
    memory_request: str
    memory_limit: str
    image: str = ""
    image_pull_policy: ImagePullPolicy = "IfNotPresent"
    machine_type: str = ""
