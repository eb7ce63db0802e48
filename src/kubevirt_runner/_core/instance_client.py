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
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class InstanceClient(ABC):
    """
    Access to the VM instances of a cluster.

    Implementations return instances as dicts in the cluster wire shape (apiVersion, kind, metadata, spec, status).
    Errors reported by the cluster are raised unchanged.
    """

    @abstractmethod
    def create_instance(
        self, namespace: str, body: Dict[str, Any], timeout: Optional[float] = None
    ) -> Dict[str, Any]:
        """
        Create a VM instance.

        Args:
            namespace (str): Namespace to create the instance in.
            body (Dict[str, Any]): The VirtualMachineInstance definition.
            timeout (Optional[float]): Deadline for the request, in seconds.

        Returns:
            Dict[str, Any]: The created instance, including its cluster assigned name.
        """
        error_message = (
            "Instance creation is not implemented. All subclasses of the InstanceClient class must implement the "
            "'create_instance' method."
        )
        logging.error(error_message)
        raise NotImplementedError(error_message)

    @abstractmethod
    def list_instances(
        self, namespace: str, label_selector: str, timeout: Optional[float] = None
    ) -> List[Dict[str, Any]]:
        """
        List VM instances matching a label selector.

        Args:
            namespace (str): Namespace to look in.
            label_selector (str): Label selector, e.g. 'key=value'.
            timeout (Optional[float]): Deadline for the request, in seconds.

        Returns:
            List[Dict[str, Any]]: The matching instances.
        """
        error_message = (
            "Instance listing is not implemented. All subclasses of the InstanceClient class must implement the "
            "'list_instances' method."
        )
        logging.error(error_message)
        raise NotImplementedError(error_message)
