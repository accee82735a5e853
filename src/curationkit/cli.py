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

"""Command line entry point for curationkit.

Usage::

    curationkit apply --findings scan.json --curations .curations.yml
    curationkit apply --findings scan.json --curations a.yml --curations b.toml --format json

Results go to stdout; logs go to stderr.  Exit status is 0 on success
and 2 when an input file cannot be loaded.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from rich.console import Console

from curationkit._types import ValidationError
from curationkit.loader import LoadError, load_curations, load_findings
from curationkit.logging import configure_logging, get_logger
from curationkit.matcher import FindingCurationMatcher
from curationkit.report import print_results_table, results_to_json, unused_curations

__all__ = [
    'build_parser',
    'main',
]

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_LOAD_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    """Build the ``curationkit`` argument parser."""
    parser = argparse.ArgumentParser(
        prog='curationkit',
        description='Apply license finding curations to scanner findings.',
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument('-v', '--verbose', action='store_true', help='Show debug output.')
    verbosity.add_argument('-q', '--quiet', action='store_true', help='Only show warnings and errors.')
    parser.add_argument(
        '--json-log',
        action='store_true',
        default=None,
        help='Log JSON lines to stderr (default: $CURATIONKIT_JSON_LOG).',
    )

    sub = parser.add_subparsers(dest='command', required=True)
    apply_p = sub.add_parser('apply', help='Curate findings and print the results.')
    apply_p.add_argument('--findings', required=True, help='Scanner findings (.json, .yml, .yaml).')
    apply_p.add_argument(
        '--curations',
        action='append',
        required=True,
        help='Curation file (.yml, .yaml, .toml, .json). May be repeated.',
    )
    apply_p.add_argument('--format', choices=('table', 'json'), default='table', help='Output format.')
    apply_p.add_argument('--workers', type=int, default=None, help='Match findings on N threads.')
    return parser


def _run_apply(args: argparse.Namespace) -> int:
    try:
        findings = load_findings(args.findings)
        curations = load_curations(args.curations)
    except (LoadError, ValidationError) as exc:
        logger.error('load_failed', error=str(exc))
        return EXIT_LOAD_ERROR

    results = FindingCurationMatcher().apply_all(findings, curations, workers=args.workers)

    for c in unused_curations(results, curations):
        logger.warning(
            'curation_unused',
            path=c.path,
            detected_license=c.detected_license,
            concluded_license=c.concluded_license,
        )

    if args.format == 'json':
        sys.stdout.write(results_to_json(results) + '\n')
    else:
        print_results_table(results, console=Console())
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line interface and return an exit status."""
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet, json_log=args.json_log)
    if args.command == 'apply':
        return _run_apply(args)
    return EXIT_OK  # pragma: no cover


if __name__ == '__main__':
    sys.exit(main())
