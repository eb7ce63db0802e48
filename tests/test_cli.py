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

from pathlib import Path
from typing import List

import pytest
import yaml
from click.testing import CliRunner
from kubernetes.client import ApiException
from kubernetes.config import ConfigException

from kubevirt_runner import ID_LABEL, InMemoryInstanceClient, build_instance_spec, parse_job_context
from kubevirt_runner.cli import main, setup_logging
from kubevirt_runner.cli.handlers import load_cluster_config


@pytest.fixture
def log_args(tmp_path: Path) -> List[str]:
    return ["--log-file", str(tmp_path / "debug.log")]


@pytest.fixture
def shared_client(monkeypatch: pytest.MonkeyPatch) -> InMemoryInstanceClient:
    client = InMemoryInstanceClient(seed=1)
    monkeypatch.setattr("kubevirt_runner.cli.handlers.make_client", lambda kube_config=None: client)
    return client


@pytest.mark.parametrize("cli", ["-h", "--help"])
def test_help(cli: str):
    runner = CliRunner()
    result = runner.invoke(main, [cli])
    assert result.exit_code == 0
    assert "Usage:" in result.output


@pytest.mark.parametrize("subcommand", ["create", "find", "render"])
def test_help_subcommands(subcommand: str):
    runner = CliRunner()
    result = runner.invoke(main, [subcommand, "--help"])
    assert result.exit_code == 0
    assert "--job-config" in result.output


def test_version():
    runner = CliRunner()
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "kubevirt-runner, version" in result.output


@pytest.mark.parametrize("subcommand", ["create", "find", "render"])
def test_job_config_must_exist(subcommand: str, tmp_path: Path, log_args: List[str]):
    runner = CliRunner()
    result = runner.invoke(main, [*log_args, subcommand, f"--job-config={tmp_path / 'missing.toml'}"])
    assert result.exit_code == 2
    assert "Invalid value for '--job-config'" in result.output


def test_invalid_log_level(tmp_path: Path):
    with pytest.raises(ValueError):
        setup_logging(str(tmp_path / "debug.log"), "LOUD")


def test_render(job_config: Path, log_args: List[str]):
    runner = CliRunner()
    result = runner.invoke(main, [*log_args, "render", f"--job-config={job_config}", "--id=job-7"])

    assert result.exit_code == 0
    body = yaml.safe_load(result.output)
    assert body == build_instance_spec(parse_job_context(job_config, {"id": "job-7"}))
    assert body["metadata"]["labels"] == {ID_LABEL: "job-7"}


def test_render_invalid_job(job_config: Path, log_args: List[str]):
    job_config.write_text(job_config.read_text().replace('"250m"', '"lots"'))

    runner = CliRunner()
    result = runner.invoke(main, [*log_args, "render", f"--job-config={job_config}"])

    assert result.exit_code == 1


def test_create_and_find(job_config: Path, log_args: List[str], shared_client: InMemoryInstanceClient):
    runner = CliRunner()

    created = runner.invoke(main, [*log_args, "create", f"--job-config={job_config}", "--namespace=builds"])
    assert created.exit_code == 0
    (name,) = list(shared_client.instances["builds"])
    assert name in created.output

    found = runner.invoke(main, [*log_args, "find", f"--job-config={job_config}", "--namespace=builds"])
    assert found.exit_code == 0
    assert name in found.output


def test_find_vanished(job_config: Path, log_args: List[str], shared_client: InMemoryInstanceClient):
    runner = CliRunner()
    result = runner.invoke(main, [*log_args, "find", f"--job-config={job_config}"])

    assert result.exit_code == 1
    assert shared_client.list_calls


def test_create_rejected(job_config: Path, log_args: List[str], shared_client: InMemoryInstanceClient):
    shared_client.fail_next_create(ApiException(status=403, reason="Forbidden"))

    runner = CliRunner()
    result = runner.invoke(main, [*log_args, "create", f"--job-config={job_config}"])

    assert result.exit_code == 1


def test_create_invalid_job_config(tmp_path: Path, log_args: List[str], shared_client: InMemoryInstanceClient):
    job_config = tmp_path / "job.toml"
    job_config.write_text('id = "job-1"\n')

    runner = CliRunner()
    result = runner.invoke(main, [*log_args, "create", f"--job-config={job_config}"])

    assert result.exit_code == 1
    assert shared_client.create_calls == []


@pytest.mark.parametrize("subcommand", ["create", "find"])
def test_missing_kube_config(
    subcommand: str, job_config: Path, tmp_path: Path, log_args: List[str], monkeypatch: pytest.MonkeyPatch
):
    monkeypatch.delenv("KUBERNETES_SERVICE_HOST", raising=False)
    monkeypatch.delenv("KUBERNETES_SERVICE_PORT", raising=False)
    monkeypatch.setenv("KUBECONFIG", str(tmp_path / "missing-kubeconfig"))

    runner = CliRunner()
    result = runner.invoke(main, [*log_args, subcommand, f"--job-config={job_config}"])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)


@pytest.mark.parametrize("subcommand", ["create", "find"])
def test_broken_kube_config(subcommand: str, job_config: Path, log_args: List[str], monkeypatch: pytest.MonkeyPatch):
    def broken_config(kube_config_path=None):
        raise ConfigException("Invalid kube-config file. No configuration found.")

    monkeypatch.setattr("kubevirt_runner.cli.handlers.load_cluster_config", broken_config)

    runner = CliRunner()
    result = runner.invoke(main, [*log_args, subcommand, f"--job-config={job_config}"])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)


class TestLoadClusterConfig:
    @pytest.fixture
    def kube_config(self, tmp_path: Path) -> Path:
        path = tmp_path / "kubeconfig"
        config = {
            "apiVersion": "v1",
            "kind": "Config",
            "current-context": "test-context",
            "clusters": [{"name": "test-cluster", "cluster": {"server": "https://test-server:6443"}}],
            "contexts": [{"name": "test-context", "context": {"cluster": "test-cluster", "user": "test-user"}}],
            "users": [{"name": "test-user", "user": {"token": "test-token"}}],
        }
        path.write_text(yaml.dump(config))
        return path

    @pytest.fixture(autouse=True)
    def outside_cluster(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("KUBERNETES_SERVICE_HOST", raising=False)
        monkeypatch.delenv("KUBERNETES_SERVICE_PORT", raising=False)

    def test_explicit_path(self, kube_config: Path, monkeypatch: pytest.MonkeyPatch):
        calls = []
        monkeypatch.setattr("kubernetes.config.load_kube_config", lambda config_file: calls.append(config_file))

        load_cluster_config(kube_config)

        assert calls == [str(kube_config)]

    def test_kubeconfig_env(self, kube_config: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("KUBECONFIG", str(kube_config))
        calls = []
        monkeypatch.setattr("kubernetes.config.load_kube_config", lambda config_file: calls.append(config_file))

        load_cluster_config()

        assert calls == [str(kube_config)]

    def test_home_fallback(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("KUBECONFIG", raising=False)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)

        with pytest.raises(FileNotFoundError) as exc_info:
            load_cluster_config()

        assert str(tmp_path / ".kube" / "config") in str(exc_info.value)

    def test_in_cluster(self, monkeypatch: pytest.MonkeyPatch):
        calls = []
        monkeypatch.setattr("kubernetes.config.load_incluster_config", lambda: calls.append("in-cluster"))
        monkeypatch.setattr("kubernetes.config.load_kube_config", lambda config_file: calls.append(config_file))

        load_cluster_config()

        assert calls == ["in-cluster"]

    def test_loads_real_config(self, kube_config: Path):
        load_cluster_config(kube_config)
