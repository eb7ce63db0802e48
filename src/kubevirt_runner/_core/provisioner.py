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
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from kubevirt_runner.util.lazy_imports import lazy

from .exceptions import MissingImageError, ResourceSpecInvalidError
from .identity import identity_labels
from .instance_client import InstanceClient
from .job_context import JobContext

API_VERSION = "kubevirt.io/v1"
KIND = "VirtualMachineInstance"
ROOT_DISK = "root"

# Canonical quantity grammar of the API server: signed decimal number, then a decimal exponent, a binary suffix or a
# decimal SI suffix.
QUANTITY_RE = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+|[KMGTPE]i|[numkMGTPE])?")


@dataclass(frozen=True)
class ResourceRequirements:
    """Requests and limits of a VM, keyed by resource name ('cpu', 'memory')."""

    requests: Dict[str, str] = field(default_factory=dict)
    limits: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        return {"requests": dict(self.requests), "limits": dict(self.limits)}


def _quantity_fields(ctx: JobContext) -> List[Tuple[str, str]]:
    return [
        ("cpu.request", ctx.cpu_request),
        ("cpu.limit", ctx.cpu_limit),
        ("memory.request", ctx.memory_request),
        ("memory.limit", ctx.memory_limit),
    ]


def parse_quantity(field_name: str, value: str) -> str:
    """
    Check that a quantity string follows the cluster quantity grammar.

    Args:
        field_name (str): Name of the field the value comes from, used in the error.
        value (str): The quantity, e.g. '1500m' or '4Gi'.

    Returns:
        str: The quantity, unchanged.

    Raises:
        ResourceSpecInvalidError: If the value is not a valid quantity.
    """
    if not QUANTITY_RE.fullmatch(value):
        err = ValueError(f"quantities must match the regular expression '{QUANTITY_RE.pattern}': '{value}'")
        logging.error(f"Invalid quantity '{value}' for {field_name}: {err}")
        raise ResourceSpecInvalidError(field_name, value, err) from err

    try:
        parsed = lazy.k8s.utils.parse_quantity(value)
    except ValueError as e:
        logging.error(f"Invalid quantity '{value}' for {field_name}: {e}")
        raise ResourceSpecInvalidError(field_name, value, e) from e

    if not parsed.is_finite():
        err = ValueError(f"quantity must be a finite number: {value}")
        logging.error(f"Invalid quantity '{value}' for {field_name}: {err}")
        raise ResourceSpecInvalidError(field_name, value, err) from err

    return value


def parse_resources(ctx: JobContext) -> ResourceRequirements:
    """
    Parse the CPU and memory quantities of a job into resource requirements.

    No check is made that a request does not exceed its limit, the cluster admission does that.
    """
    quantities = {name: parse_quantity(name, value) for name, value in _quantity_fields(ctx)}
    return ResourceRequirements(
        requests={"cpu": quantities["cpu.request"], "memory": quantities["memory.request"]},
        limits={"cpu": quantities["cpu.limit"], "memory": quantities["memory.limit"]},
    )


def build_instance_spec(ctx: JobContext) -> Dict[str, Any]:
    """
    Build the VirtualMachineInstance definition for a job.

    Args:
        ctx (JobContext): The job to build the VM for.

    Returns:
        Dict[str, Any]: The definition, ready to be submitted to the cluster.

    Raises:
        ResourceSpecInvalidError: If one of the quantities cannot be parsed.
        MissingImageError: If the job has no image.
    """
    resources = parse_resources(ctx)

    if not ctx.image:
        logging.error(f"Job '{ctx.id}' does not specify a containerdisk image.")
        raise MissingImageError(ctx.id)

    return {
        "apiVersion": API_VERSION,
        "kind": KIND,
        "metadata": {
            "generateName": ctx.base_name,
            "labels": identity_labels(ctx),
        },
        "spec": {
            "domain": {
                "resources": resources.to_dict(),
                "machine": {"type": ctx.machine_type},
                "devices": {"disks": [{"name": ROOT_DISK}]},
            },
            "volumes": [
                {
                    "name": ROOT_DISK,
                    "containerDisk": {"image": ctx.image, "imagePullPolicy": ctx.image_pull_policy},
                }
            ],
        },
    }


def create_job_vm(client: InstanceClient, ctx: JobContext, timeout: Optional[float] = None) -> Dict[str, Any]:
    """
    Create the VM for a job.

    The definition is fully validated before anything is sent, so the cluster is contacted only once and only for a
    valid definition. Errors reported by the cluster are propagated unchanged.

    Args:
        client (InstanceClient): Client of the cluster.
        ctx (JobContext): The job to create the VM for.
        timeout (Optional[float]): Deadline for the creation request, in seconds.

    Returns:
        Dict[str, Any]: The created instance as returned by the cluster.
    """
    body = build_instance_spec(ctx)
    logging.debug(f"Creating VM for job '{ctx.id}' in namespace '{ctx.namespace}' with spec: {body}")
    instance = client.create_instance(ctx.namespace, body, timeout=timeout)
    logging.info(f"Created VM '{instance['metadata']['name']}' for job '{ctx.id}'")
    return instance
