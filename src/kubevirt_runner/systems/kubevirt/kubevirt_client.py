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

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional, cast

if TYPE_CHECKING:
    import kubernetes as k8s

from kubevirt_runner._core.instance_client import InstanceClient
from kubevirt_runner.util.lazy_imports import lazy

KUBEVIRT_GROUP = "kubevirt.io"
KUBEVIRT_VERSION = "v1"
VMI_PLURAL = "virtualmachineinstances"


class KubeVirtClient(InstanceClient):
    """
    VM instances of a KubeVirt enabled Kubernetes cluster.

    Attributes
        custom_objects_api (CustomObjectsApi): Authenticated Kubernetes Custom Objects API client instance.
    """

    def __init__(self, custom_objects_api: Optional[k8s.client.CustomObjectsApi] = None):
        """
        Initialize a KubeVirtClient instance.

        Args:
            custom_objects_api (Optional[CustomObjectsApi]): API client to use. When omitted, one is created from the
                currently loaded Kubernetes configuration.
        """
        if custom_objects_api is None:
            custom_objects_api = lazy.k8s.client.CustomObjectsApi()
        self.custom_objects_api = custom_objects_api

    def __repr__(self) -> str:
        return f"KubeVirtClient(group={KUBEVIRT_GROUP}, version={KUBEVIRT_VERSION}, plural={VMI_PLURAL})"

    def create_instance(
        self, namespace: str, body: Dict[str, Any], timeout: Optional[float] = None
    ) -> Dict[str, Any]:
        logging.debug(f"Submitting {body.get('kind')} to namespace '{namespace}'")
        try:
            api_response = self.custom_objects_api.create_namespaced_custom_object(
                group=KUBEVIRT_GROUP,
                version=KUBEVIRT_VERSION,
                namespace=namespace,
                plural=VMI_PLURAL,
                body=body,
                _request_timeout=timeout,
            )
        except lazy.k8s.client.ApiException as e:
            logging.error(
                f"Failed to create VirtualMachineInstance in namespace '{namespace}'. "
                f"Error code: {e.status}. Message: {e.reason}."
            )
            raise

        instance = cast(Dict[str, Any], api_response)
        logging.debug(f"VirtualMachineInstance '{instance['metadata']['name']}' created in namespace '{namespace}'")
        return instance

    def list_instances(
        self, namespace: str, label_selector: str, timeout: Optional[float] = None
    ) -> List[Dict[str, Any]]:
        try:
            api_response = self.custom_objects_api.list_namespaced_custom_object(
                group=KUBEVIRT_GROUP,
                version=KUBEVIRT_VERSION,
                namespace=namespace,
                plural=VMI_PLURAL,
                label_selector=label_selector,
                _request_timeout=timeout,
            )
        except lazy.k8s.client.ApiException as e:
            logging.error(
                f"Failed to list VirtualMachineInstances in namespace '{namespace}' with selector "
                f"'{label_selector}'. Error code: {e.status}. Message: {e.reason}."
            )
            raise

        items: List[Dict[str, Any]] = cast(dict, api_response).get("items") or []
        logging.debug(f"Found {len(items)} VirtualMachineInstance(s) matching '{label_selector}' in '{namespace}'")
        return items
