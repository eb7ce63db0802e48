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
from typing import Any, Dict, Optional

from .exceptions import AmbiguousInstanceError, InstanceVanishedError
from .identity import selector
from .instance_client import InstanceClient
from .job_context import JobContext


def find_job_vm(client: InstanceClient, ctx: JobContext, timeout: Optional[float] = None) -> Dict[str, Any]:
    """
    Find the VM previously created for a job.

    Exactly one instance must carry the ID of the job. Neither zero nor multiple matches are resolved here: the
    caller decides whether to retry.

    Args:
        client (InstanceClient): Client of the cluster.
        ctx (JobContext): The job to find the VM of.
        timeout (Optional[float]): Deadline for the listing request, in seconds.

    Returns:
        Dict[str, Any]: The instance, as returned by the cluster.

    Raises:
        InstanceVanishedError: If no instance carries the ID.
        AmbiguousInstanceError: If more than one instance carries the ID.
    """
    label_selector = selector(ctx)
    logging.debug(f"Looking up VM in namespace '{ctx.namespace}' with selector '{label_selector}'")
    items = client.list_instances(ctx.namespace, label_selector, timeout=timeout)

    if not items:
        logging.error(f"No VM found for job '{ctx.id}' in namespace '{ctx.namespace}'")
        raise InstanceVanishedError(ctx.id)
    if len(items) > 1:
        logging.error(f"{len(items)} VMs found for job '{ctx.id}' in namespace '{ctx.namespace}'")
        raise AmbiguousInstanceError(ctx.id, len(items))

    return items[0]
