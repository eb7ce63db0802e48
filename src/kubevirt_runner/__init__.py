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

from ._core import (
    ID_LABEL,
    LABEL_PREFIX,
    AmbiguousInstanceError,
    ImagePullPolicy,
    InstanceClient,
    InstanceVanishedError,
    JobContext,
    JobContextParsingError,
    MissingImageError,
    ResourceRequirements,
    ResourceSpecInvalidError,
    VMError,
    build_instance_spec,
    create_job_vm,
    find_job_vm,
    format_validation_error,
    identity_labels,
    parse_resources,
    selector,
)
from .parser import parse_job_context
from .systems import InMemoryInstanceClient, KubeVirtClient

__all__ = [
    "ID_LABEL",
    "LABEL_PREFIX",
    "AmbiguousInstanceError",
    "ImagePullPolicy",
    "InMemoryInstanceClient",
    "InstanceClient",
    "InstanceVanishedError",
    "JobContext",
    "JobContextParsingError",
    "KubeVirtClient",
    "MissingImageError",
    "ResourceRequirements",
    "ResourceSpecInvalidError",
    "VMError",
    "build_instance_spec",
    "create_job_vm",
    "find_job_vm",
    "format_validation_error",
    "identity_labels",
    "parse_job_context",
    "parse_resources",
    "selector",
]
