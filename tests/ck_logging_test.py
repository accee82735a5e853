# Copyright 2026 Google LLC
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
#
# SPDX-License-Identifier: Apache-2.0

"""Tests for curationkit.logging module."""

from __future__ import annotations

import logging

import pytest
from curationkit.logging import configure_logging, get_logger, json_log_from_env


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_default_level_is_info(self) -> None:
        """Default logging level should be INFO."""
        configure_logging()
        assert logging.root.level == logging.INFO

    def test_verbose_sets_debug(self) -> None:
        """Verbose flag should set DEBUG level."""
        configure_logging(verbose=True)
        assert logging.root.level == logging.DEBUG

    def test_quiet_sets_warning(self) -> None:
        """Quiet flag should set WARNING level."""
        configure_logging(quiet=True)
        assert logging.root.level == logging.WARNING

    def test_json_log_does_not_crash(self) -> None:
        """JSON log mode should configure without errors."""
        configure_logging(json_log=True)
        get_logger().info('test_json', key='value')


class TestJsonLogFromEnv:
    """Tests for the CURATIONKIT_JSON_LOG switch."""

    @pytest.mark.parametrize('value', ['1', 'true', 'YES', 'on'])
    def test_enabled(self, monkeypatch: pytest.MonkeyPatch, value: str) -> None:
        """Test enabled."""
        monkeypatch.setenv('CURATIONKIT_JSON_LOG', value)
        assert json_log_from_env()

    @pytest.mark.parametrize('value', ['0', '', 'no'])
    def test_disabled(self, monkeypatch: pytest.MonkeyPatch, value: str) -> None:
        """Test disabled."""
        monkeypatch.setenv('CURATIONKIT_JSON_LOG', value)
        assert not json_log_from_env()

    def test_unset(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test unset."""
        monkeypatch.delenv('CURATIONKIT_JSON_LOG', raising=False)
        assert not json_log_from_env()


class TestGetLogger:
    """Tests for get_logger()."""

    def test_logger_can_log(self) -> None:
        """Logger should be able to emit messages without crashing."""
        configure_logging(quiet=True)
        log = get_logger('test')
        log.info('test message', key='value')
        log.debug('debug message')
        log.warning('warning message')
