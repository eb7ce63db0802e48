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

from .exceptions import (
    AmbiguousInstanceError,
    InstanceVanishedError,
    JobContextParsingError,
    MissingImageError,
    ResourceSpecInvalidError,
    VMError,
    format_validation_error,
)
from .identity import ID_LABEL, LABEL_PREFIX, identity_labels, selector
from .instance_client import InstanceClient
from .job_context import ImagePullPolicy, JobContext
from .locator import find_job_vm
from .provisioner import ResourceRequirements, build_instance_spec, create_job_vm, parse_resources

__all__ = [
    "ID_LABEL",
    "LABEL_PREFIX",
    "AmbiguousInstanceError",
    "ImagePullPolicy",
    "InstanceClient",
    "InstanceVanishedError",
    "JobContext",
    "JobContextParsingError",
    "MissingImageError",
    "ResourceRequirements",
    "ResourceSpecInvalidError",
    "VMError",
    "build_instance_spec",
    "create_job_vm",
    "find_job_vm",
    "format_validation_error",
    "identity_labels",
    "parse_resources",
    "selector",
]
