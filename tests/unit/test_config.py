# SPDX-FileCopyrightText: 2026 The Botanu Authors
# SPDX-License-Identifier: Apache-2.0

"""Tests for ReceiverConfig."""

from __future__ import annotations

import os
from unittest import mock

import pytest

from ghactions_receiver.sdk.config import ReceiverConfig, _interpolate_env_vars


class TestInterpolateEnvVars:
    """Tests for environment variable interpolation."""

    def test_interpolates_env_vars(self):
        with mock.patch.dict(os.environ, {"MY_SECRET": "hunter2"}):
            result = _interpolate_env_vars("secret: ${MY_SECRET}")
            assert result == "secret: hunter2"

    def test_preserves_unset_vars(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            result = _interpolate_env_vars("secret: ${UNSET_VAR}")
            assert result == "secret: ${UNSET_VAR}"

    def test_default_value_when_unset(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            result = _interpolate_env_vars("path: ${UNSET_VAR:-/events}")
            assert result == "path: /events"


class TestReceiverConfigDefaults:
    """Tests for ReceiverConfig defaults and env vars."""

    def test_default_values(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            config = ReceiverConfig()

            assert config.endpoint == "0.0.0.0:19418"
            assert config.path == "/events"
            assert config.secret == ""
            assert config.require_signature is False
            assert config.custom_service_name == ""
            assert config.service_name_prefix == ""
            assert config.service_name_suffix == ""
            assert config.otlp_endpoint == "http://localhost:4318/v1/traces"

    def test_env_vars(self):
        env = {
            "GHA_RECEIVER_SECRET": "s3cr3t",
            "GHA_RECEIVER_PATH": "/hooks",
            "GHA_RECEIVER_REQUIRE_SIGNATURE": "true",
            "GHA_RECEIVER_SERVICE_NAME_PREFIX": "ci-",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            config = ReceiverConfig()
            assert config.secret == "s3cr3t"
            assert config.path == "/hooks"
            assert config.require_signature is True
            assert config.service_name_prefix == "ci-"

    def test_otlp_traces_endpoint_used_directly(self):
        env = {"OTEL_EXPORTER_OTLP_TRACES_ENDPOINT": "http://collector:4318/v1/traces"}
        with mock.patch.dict(os.environ, env, clear=True):
            assert ReceiverConfig().otlp_endpoint == "http://collector:4318/v1/traces"

    def test_otlp_base_endpoint_gets_traces_path(self):
        with mock.patch.dict(os.environ, {"OTEL_EXPORTER_OTLP_ENDPOINT": "http://collector:4318/"}, clear=True):
            assert ReceiverConfig().otlp_endpoint == "http://collector:4318/v1/traces"

    def test_explicit_values_override_env(self):
        with mock.patch.dict(os.environ, {"GHA_RECEIVER_SECRET": "env"}):
            assert ReceiverConfig(secret="explicit").secret == "explicit"

    def test_explicit_require_signature_beats_env(self):
        with mock.patch.dict(os.environ, {"GHA_RECEIVER_REQUIRE_SIGNATURE": "false"}):
            assert ReceiverConfig(require_signature=True).require_signature is True

    def test_explicit_false_require_signature_beats_env(self):
        with mock.patch.dict(os.environ, {"GHA_RECEIVER_REQUIRE_SIGNATURE": "true"}):
            assert ReceiverConfig(require_signature=False).require_signature is False

    def test_host_and_port(self):
        config = ReceiverConfig(endpoint="127.0.0.1:8080")
        assert config.host == "127.0.0.1"
        assert config.port == 8080


class TestReceiverConfigValidate:
    def test_valid(self):
        ReceiverConfig(endpoint="localhost:19418", path="/events").validate()

    def test_missing_endpoint(self):
        with pytest.raises(ValueError, match="missing a receiver endpoint"):
            ReceiverConfig(endpoint="").validate()

    def test_relative_path(self):
        with pytest.raises(ValueError):
            ReceiverConfig(path="events").validate()

    @pytest.mark.parametrize("endpoint", ["localhost", "localhost:", "host:abc", "host:0", "host:70000"])
    def test_endpoint_without_port(self, endpoint):
        with pytest.raises(ValueError, match="host:port"):
            ReceiverConfig(endpoint=endpoint).validate()

    def test_port_only_endpoint(self):
        ReceiverConfig(endpoint=":19418").validate()


class TestReceiverConfigFromYaml:
    """Tests for loading config from YAML."""

    def test_from_yaml(self, tmp_path):
        yaml_content = """
server:
  endpoint: "0.0.0.0:9000"
  path: /gh
  secret: ${TEST_WEBHOOK_SECRET}
  require_signature: true
service_name:
  prefix: ci-
  suffix: -prod
otlp:
  endpoint: http://collector:4318/v1/traces
  headers:
    Authorization: Bearer token123
"""
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text(yaml_content)

        with mock.patch.dict(os.environ, {"TEST_WEBHOOK_SECRET": "from-env"}):
            config = ReceiverConfig.from_yaml(str(yaml_file))

        assert config.endpoint == "0.0.0.0:9000"
        assert config.path == "/gh"
        assert config.secret == "from-env"
        assert config.require_signature is True
        assert config.service_name_prefix == "ci-"
        assert config.service_name_suffix == "-prod"
        assert config.otlp_headers == {"Authorization": "Bearer token123"}
        assert config._config_file == str(yaml_file)

    def test_yaml_require_signature_beats_env(self, tmp_path):
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("server:\n  secret: s3cr3t\n  require_signature: true\n")

        with mock.patch.dict(os.environ, {"GHA_RECEIVER_REQUIRE_SIGNATURE": "false"}):
            config = ReceiverConfig.from_yaml(str(yaml_file))

        assert config.require_signature is True

    def test_from_yaml_empty_file(self, tmp_path):
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")

        with mock.patch.dict(os.environ, {}, clear=True):
            config = ReceiverConfig.from_yaml(str(yaml_file))
        assert config.path == "/events"

    def test_from_yaml_missing_file(self):
        with pytest.raises(FileNotFoundError):
            ReceiverConfig.from_yaml("/nonexistent/config.yaml")

    def test_from_yaml_no_path(self):
        with pytest.raises(FileNotFoundError):
            ReceiverConfig.from_yaml(None)

    def test_from_yaml_invalid(self, tmp_path):
        yaml_file = tmp_path / "bad.yaml"
        yaml_file.write_text("server: [unclosed")

        with pytest.raises(ValueError, match="Invalid YAML"):
            ReceiverConfig.from_yaml(str(yaml_file))

    def test_from_file_or_env_falls_back(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with mock.patch.dict(os.environ, {"GHA_RECEIVER_SECRET": "env-only"}, clear=True):
            config = ReceiverConfig.from_file_or_env()
        assert config.secret == "env-only"
        assert config._config_file is None

    def test_from_file_or_env_finds_default_file(self, tmp_path, monkeypatch):
        (tmp_path / "ghactions_receiver.yaml").write_text("server:\n  path: /found\n")
        monkeypatch.chdir(tmp_path)
        with mock.patch.dict(os.environ, {}, clear=True):
            config = ReceiverConfig.from_file_or_env()
        assert config.path == "/found"


class TestReceiverConfigToDict:
    def test_secret_is_masked(self):
        data = ReceiverConfig(secret="s3cr3t").to_dict()
        assert data["server"]["secret"] == "***"

    def test_round_trip_fields(self):
        data = ReceiverConfig(service_name_prefix="ci-", path="/x").to_dict()
        assert data["service_name"]["prefix"] == "ci-"
        assert data["server"]["path"] == "/x"
