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
import logging.config
from pathlib import Path
from typing import Optional

import click

from .handlers import handle_create, handle_find, handle_render


def setup_logging(log_file: str, log_level: str) -> None:
    """
    Configure logging for the application.

    Args:
        log_level (str): The logging level (e.g., DEBUG, INFO).
        log_file (str): The name of the log file.
    """
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {log_level}")

    LOGGING_CONFIG = {
        "version": 1,
        "disable_existing_loggers": True,
        "formatters": {
            "standard": {"format": "%(asctime)s - %(levelname)s - %(message)s"},
            "rich": {"format": "%(message)s", "datefmt": "[%X]"},
        },
        "handlers": {
            "rich": {
                "class": "rich.logging.RichHandler",
                "level": log_level.upper(),
                "formatter": "rich",
                "rich_tracebacks": True,
                "show_path": False,
                "enable_link_path": True,
            },
            "debug_file": {
                "level": "DEBUG",
                "formatter": "standard",
                "class": "logging.FileHandler",
                "filename": log_file,
                "mode": "w",
            },
        },
        "loggers": {
            "": {
                "handlers": ["rich", "debug_file"],
                "level": "DEBUG",
                "propagate": False,
            },
            "kubernetes": {
                "handlers": ["debug_file"],
                "propagate": False,
            },
        },
    }
    logging.config.dictConfig(LOGGING_CONFIG)


def job_options(f):
    f = click.option(
        "--job-config",
        required=True,
        type=click.Path(exists=True, resolve_path=True, path_type=Path, dir_okay=False),
        help="Job config path.",
    )(f)
    f = click.option("--id", "job_id", default=None, help="Job ID, overrides the one from the job config.")(f)
    f = click.option("--namespace", default=None, help="Namespace, overrides the one from the job config.")(f)
    return f


def cluster_options(f):
    f = click.option(
        "--kube-config",
        default=None,
        type=click.Path(exists=True, resolve_path=True, path_type=Path, dir_okay=False),
        help="Kube config path. Defaults to in-cluster config, then $KUBECONFIG, then ~/.kube/config.",
    )(f)
    f = click.option("--timeout", default=None, type=float, help="Deadline for cluster requests, in seconds.")(f)
    return f


@click.group(name="kubevirt-runner", context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--log-file", default="debug.log", help="Log file path for storing verbose output.")
@click.option("--log-level", default="INFO", help="Log level for standard output.")
@click.version_option(prog_name="kubevirt-runner")
def main(log_file, log_level):
    """kubevirt-runner creates and finds the KubeVirt VMs that run batch jobs."""
    setup_logging(log_file, log_level)


@main.command()
@job_options
@cluster_options
def create(
    job_config: Path,
    job_id: Optional[str],
    namespace: Optional[str],
    kube_config: Optional[Path],
    timeout: Optional[float],
):
    """Create the VM of a job and print its name."""
    args = argparse.Namespace(
        job_config=job_config, id=job_id, namespace=namespace, kube_config=kube_config, timeout=timeout
    )
    exit(handle_create(args))


@main.command()
@job_options
@cluster_options
def find(
    job_config: Path,
    job_id: Optional[str],
    namespace: Optional[str],
    kube_config: Optional[Path],
    timeout: Optional[float],
):
    """Find the VM previously created for a job and print its name."""
    args = argparse.Namespace(
        job_config=job_config, id=job_id, namespace=namespace, kube_config=kube_config, timeout=timeout
    )
    exit(handle_find(args))


@main.command()
@job_options
def render(job_config: Path, job_id: Optional[str], namespace: Optional[str]):
    """Print the VM definition of a job as YAML without contacting the cluster."""
    args = argparse.Namespace(job_config=job_config, id=job_id, namespace=namespace)
    exit(handle_render(args))
