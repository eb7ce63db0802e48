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

import argparse
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from kubevirt_runner.core import (
    InstanceClient,
    JobContext,
    JobContextParsingError,
    VMError,
    build_instance_spec,
    create_job_vm,
    find_job_vm,
)
from kubevirt_runner.parser import parse_job_context
from kubevirt_runner.systems import KubeVirtClient
from kubevirt_runner.util.lazy_imports import lazy


def load_cluster_config(kube_config_path: Optional[Path] = None) -> None:
    """
    Load the Kubernetes client configuration.

    An explicitly given kube config wins. Otherwise the in-cluster service account is used when running inside a
    pod, then $KUBECONFIG, then ~/.kube/config.

    Args:
        kube_config_path (Optional[Path]): Kube config file given by the user.
    """
    if kube_config_path is None:
        try:
            lazy.k8s.config.load_incluster_config()
            logging.debug("Using in-cluster Kubernetes configuration")
            return
        except lazy.k8s.config.ConfigException:
            logging.debug("Not running inside a cluster, looking for a kube config file")

        kube_config_path = Path(os.environ.get("KUBECONFIG") or Path.home() / ".kube" / "config")

    if not kube_config_path.exists():
        error_message = (
            f"Kube config file '{kube_config_path}' not found. This file is required to configure the "
            f"Kubernetes environment. Please verify that the file exists at the specified path."
        )
        logging.error(error_message)
        raise FileNotFoundError(error_message)

    logging.debug(f"Loading kube config from: {kube_config_path}")
    lazy.k8s.config.load_kube_config(config_file=str(kube_config_path))


def make_client(kube_config_path: Optional[Path] = None) -> InstanceClient:
    load_cluster_config(kube_config_path)
    return KubeVirtClient()


def _load_job(args: argparse.Namespace) -> Optional[JobContext]:
    overrides: Dict[str, Any] = {"id": args.id, "namespace": args.namespace}
    try:
        return parse_job_context(args.job_config, overrides)
    except JobContextParsingError:
        return None


def handle_create(args: argparse.Namespace) -> int:
    """
    Create the VM of a job and print its name.

    Args:
        args (argparse.Namespace): The parsed command-line arguments.
    """
    ctx = _load_job(args)
    if ctx is None:
        return 1

    try:
        client = make_client(args.kube_config)
    except (FileNotFoundError, lazy.k8s.config.ConfigException) as e:
        logging.error(f"Cannot configure the Kubernetes client: {e}")
        return 1

    try:
        instance = create_job_vm(client, ctx, timeout=args.timeout)
    except VMError as e:
        logging.error(f"Cannot create VM for job '{ctx.id}': {e}")
        return 1
    except lazy.k8s.client.ApiException as e:
        logging.error(f"Cluster rejected VM for job '{ctx.id}'. Error code: {e.status}. Message: {e.reason}.")
        return 1

    print(instance["metadata"]["name"])
    return 0


def handle_find(args: argparse.Namespace) -> int:
    """
    Find the VM of a job and print its name.

    Args:
        args (argparse.Namespace): The parsed command-line arguments.
    """
    ctx = _load_job(args)
    if ctx is None:
        return 1

    try:
        client = make_client(args.kube_config)
    except (FileNotFoundError, lazy.k8s.config.ConfigException) as e:
        logging.error(f"Cannot configure the Kubernetes client: {e}")
        return 1

    try:
        instance = find_job_vm(client, ctx, timeout=args.timeout)
    except VMError as e:
        logging.error(f"Cannot find VM for job '{ctx.id}': {e}")
        return 1
    except lazy.k8s.client.ApiException as e:
        logging.error(f"Failed to look up VM for job '{ctx.id}'. Error code: {e.status}. Message: {e.reason}.")
        return 1

    print(instance["metadata"]["name"])
    return 0


def handle_render(args: argparse.Namespace) -> int:
    """Print the VM definition of a job without contacting the cluster."""
    ctx = _load_job(args)
    if ctx is None:
        return 1

    try:
        body = build_instance_spec(ctx)
    except VMError as e:
        logging.error(f"Invalid job '{ctx.id}': {e}")
        return 1

    print(yaml.safe_dump(body, sort_keys=False), end="")
    return 0
