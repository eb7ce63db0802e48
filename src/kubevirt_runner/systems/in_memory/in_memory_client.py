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

import copy
import logging
import random
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from kubevirt_runner._core.instance_client import InstanceClient
from kubevirt_runner.util.lazy_imports import lazy

# Same alphabet the API server uses for generated name suffixes.
NAME_SUFFIX_ALPHABET = "bcdfghjklmnpqrstvwxz2456789"
NAME_SUFFIX_LENGTH = 5


def parse_label_selector(label_selector: str) -> List[Tuple[str, str, str]]:
    """
    Parse an equality based label selector.

    Args:
        label_selector (str): Comma separated requirements, each one of 'key=value', 'key==value' or 'key!=value'.

    Returns:
        List[Tuple[str, str, str]]: (key, operator, value) for every requirement, operator being '=' or '!='.

    Raises:
        ValueError: If a requirement is not an equality requirement.
    """
    requirements: List[Tuple[str, str, str]] = []
    for raw in label_selector.split(","):
        raw = raw.strip()
        if not raw:
            continue
        for op in ("!=", "==", "="):
            if op in raw:
                key, value = raw.split(op, 1)
                requirements.append((key.strip(), "!=" if op == "!=" else "=", value.strip()))
                break
        else:
            raise ValueError(f"Unsupported label selector requirement: '{raw}'")
    return requirements


def matches(labels: Dict[str, str], requirements: List[Tuple[str, str, str]]) -> bool:
    for key, op, value in requirements:
        if op == "=" and labels.get(key) != value:
            return False
        if op == "!=" and labels.get(key) == value:
            return False
    return True


class InMemoryInstanceClient(InstanceClient):
    """
    In-process stand-in for the VM instances of a cluster.

    Names are generated from `metadata.generateName` the way the API server does it. Every call is recorded so that
    callers can assert on how many requests were made.

    Attributes
        instances (Dict[str, Dict[str, Dict[str, Any]]]): Stored instances, by namespace then by name.
        create_calls (List[Tuple[str, Dict[str, Any]]]): (namespace, body) of every create request.
        list_calls (List[Tuple[str, str]]): (namespace, label selector) of every list request.
    """

    def __init__(self, seed: Optional[int] = None):
        self.instances: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self.create_calls: List[Tuple[str, Dict[str, Any]]] = []
        self.list_calls: List[Tuple[str, str]] = []
        self._next_create_error: Optional[Exception] = None
        self._random = random.Random(seed)

    def fail_next_create(self, error: Exception) -> None:
        """Make the next `create_instance` call raise `error` instead of creating anything."""
        self._next_create_error = error

    def add_instance(self, namespace: str, instance: Dict[str, Any]) -> Dict[str, Any]:
        """Store an instance as if it was created by somebody else."""
        return self._store(namespace, copy.deepcopy(instance))

    def _generate_name(self, prefix: str) -> str:
        suffix = "".join(self._random.choice(NAME_SUFFIX_ALPHABET) for _ in range(NAME_SUFFIX_LENGTH))
        return f"{prefix}{suffix}"

    def _store(self, namespace: str, instance: Dict[str, Any]) -> Dict[str, Any]:
        metadata = instance.setdefault("metadata", {})
        in_namespace = self.instances.setdefault(namespace, {})

        name = metadata.get("name")
        if not name:
            prefix = metadata.get("generateName")
            if not prefix:
                raise lazy.k8s.client.ApiException(status=422, reason="name or generateName is required")
            name = self._generate_name(prefix)
            while name in in_namespace:
                name = self._generate_name(prefix)
        elif name in in_namespace:
            raise lazy.k8s.client.ApiException(status=409, reason=f"'{name}' already exists")

        metadata["name"] = name
        metadata["namespace"] = namespace
        metadata.setdefault("labels", {})
        metadata.setdefault("uid", str(uuid.uuid4()))
        metadata.setdefault("creationTimestamp", datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"))
        instance.setdefault("status", {"phase": "Pending"})

        in_namespace[name] = instance
        logging.debug(f"Stored instance '{name}' in namespace '{namespace}'")
        return copy.deepcopy(instance)

    def create_instance(
        self, namespace: str, body: Dict[str, Any], timeout: Optional[float] = None
    ) -> Dict[str, Any]:
        self.create_calls.append((namespace, copy.deepcopy(body)))

        if self._next_create_error is not None:
            error, self._next_create_error = self._next_create_error, None
            raise error

        return self._store(namespace, copy.deepcopy(body))

    def list_instances(
        self, namespace: str, label_selector: str, timeout: Optional[float] = None
    ) -> List[Dict[str, Any]]:
        self.list_calls.append((namespace, label_selector))
        requirements = parse_label_selector(label_selector)
        return [
            copy.deepcopy(instance)
            for instance in self.instances.get(namespace, {}).values()
            if matches(instance["metadata"].get("labels", {}), requirements)
        ]
