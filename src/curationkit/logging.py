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

"""Structured logging for curationkit.

Configures `structlog <https://www.structlog.org/>`_ with two output modes:

- **Console** (default): human-readable output, colored on a TTY.
- **JSON** (``--json-log`` or ``CURATIONKIT_JSON_LOG=1``): one JSON
  object per line, for CI systems that collect audit logs.

Both modes write to stderr so stdout stays clean for the curated
results (e.g. ``curationkit apply ... --format json | jq``).

Usage::

    from curationkit.logging import configure_logging, get_logger

    configure_logging(verbose=True)
    log = get_logger(__name__)
    log.info('curations_loaded', path='curations.yml', count=12)
"""

from __future__ import annotations

import logging
import os
import sys

import structlog

__all__ = [
    'configure_logging',
    'get_logger',
    'json_log_from_env',
]

_JSON_LOG_ENV = 'CURATIONKIT_JSON_LOG'


def json_log_from_env() -> bool:
    """Return ``True`` if ``CURATIONKIT_JSON_LOG`` asks for JSON logs."""
    return os.environ.get(_JSON_LOG_ENV, '0').strip().lower() in {'1', 'true', 'yes', 'on'}


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    json_log: bool | None = None,
) -> None:
    """Configure structlog for curationkit.

    Should be called once at startup, before any logging calls.

    Args:
        verbose: Enable debug-level output.
        quiet: Only show warnings and errors.
        json_log: Use JSON output instead of console output. ``None``
            defers to the ``CURATIONKIT_JSON_LOG`` environment variable.
    """
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    if json_log is None:
        json_log = json_log_from_env()

    logging.basicConfig(
        format='%(message)s',
        stream=sys.stderr,
        level=level,
        force=True,
    )

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_log:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )
    for handler in logging.root.handlers:
        handler.setFormatter(formatter)


def get_logger(name: str = 'curationkit') -> structlog.stdlib.BoundLogger:
    """Return a bound structlog logger.

    Args:
        name: Logger name, used for filtering and identification.
    """
    return structlog.get_logger(name)
