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

"""Render curation results for people and machines.

The matcher returns an unordered set.  Everything here first puts the
results into a stable order (by location, then license, with removals
after kept findings) so that reports are reproducible.

Usage::

    from curationkit.report import print_results_table, results_to_json

    print_results_table(results)
    Path('curated.json').write_text(results_to_json(results))
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from io import StringIO
from typing import Any

from rich.console import Console
from rich.table import Table
from rich.text import Text

from curationkit._types import LicenseFinding, TextLocation
from curationkit.curations import LicenseFindingCuration
from curationkit.matcher import Curated, LicenseFindingCurationResult

__all__ = [
    'format_results_table',
    'print_results_table',
    'result_to_dict',
    'results_to_json',
    'sort_results',
    'unused_curations',
]


def _finding_of(result: LicenseFindingCurationResult) -> LicenseFinding:
    outcome = result.outcome
    return outcome.finding if isinstance(outcome, Curated) else outcome.original


def _sort_key(result: LicenseFindingCurationResult) -> tuple[TextLocation, bool, str, bool]:
    finding = _finding_of(result)
    return (finding.location, result.removed, finding.license, result.curated)


def sort_results(results: Iterable[LicenseFindingCurationResult]) -> list[LicenseFindingCurationResult]:
    """Return *results* in a stable, display-friendly order."""
    return sorted(results, key=_sort_key)


def unused_curations(
    results: Iterable[LicenseFindingCurationResult],
    curations: Iterable[LicenseFindingCuration],
) -> list[LicenseFindingCuration]:
    """Return the curations that matched no finding, in input order.

    An unused curation usually means the file it targets moved or the
    scanner output changed, so it is worth reviewing.
    """
    used: set[LicenseFindingCuration] = set()
    for r in results:
        used.update(c for _, c in r.original_findings)
    return [c for c in curations if c not in used]


def _finding_to_dict(finding: LicenseFinding) -> dict[str, Any]:
    loc = finding.location
    return {
        'license': finding.license,
        'location': {'path': loc.path, 'start_line': loc.start_line, 'end_line': loc.end_line},
    }


def _curation_to_dict(curation: LicenseFindingCuration) -> dict[str, Any]:
    return {
        'path': curation.path,
        'start_lines': list(curation.start_lines),
        'line_count': curation.line_count,
        'detected_license': curation.detected_license,
        'concluded_license': curation.concluded_license,
        'reason': curation.reason.value,
        'comment': curation.comment,
    }


def result_to_dict(result: LicenseFindingCurationResult) -> dict[str, Any]:
    """Serialize one result; a removed finding has ``curated_finding: null``."""
    curated = result.curated_finding
    return {
        'curated_finding': _finding_to_dict(curated) if curated is not None else None,
        'original_findings': [
            {'finding': _finding_to_dict(f), 'curation': _curation_to_dict(c)} for f, c in result.original_findings
        ],
    }


def results_to_json(results: Iterable[LicenseFindingCurationResult], *, indent: int = 2) -> str:
    """Serialize results to JSON in :func:`sort_results` order."""
    return json.dumps([result_to_dict(r) for r in sort_results(results)], indent=indent)


def print_results_table(
    results: Iterable[LicenseFindingCurationResult],
    console: Console | None = None,
) -> None:
    """Print results as a Rich table followed by summary counts.

    Args:
        results: Results from :meth:`FindingCurationMatcher.apply_all`.
        console: Rich :class:`Console` to print to.  When ``None``,
            a default ``Console()`` is created (auto-detects TTY).
    """
    if console is None:
        console = Console()
    ordered: Sequence[LicenseFindingCurationResult] = sort_results(results)

    table = Table(
        show_header=True,
        header_style='bold',
        show_edge=False,
        pad_edge=False,
        expand=True,
    )
    table.add_column('Location', min_width=20, ratio=3)
    table.add_column('Detected', min_width=12, ratio=2)
    table.add_column('Curated', min_width=12, ratio=2)
    table.add_column('Reason', min_width=10)
    table.add_column('Comment', ratio=2, style='dim')

    for r in ordered:
        finding = _finding_of(r)
        if not r.curated:
            table.add_row(str(finding.location), finding.license, Text('unchanged', style='dim'), '', '')
            continue
        if r.removed:
            curated = Text('removed', style='red')
        else:
            curated = Text(finding.license, style='green')
        for original, curation in r.original_findings:
            table.add_row(
                str(original.location),
                original.license,
                curated,
                curation.reason.value,
                curation.comment,
            )

    console.print(table)

    relicensed = sum(1 for r in ordered if r.curated and not r.removed)
    removed = sum(1 for r in ordered if r.removed)
    unchanged = sum(1 for r in ordered if not r.curated)
    console.print(f'\n{relicensed} relicensed, {removed} removed, {unchanged} unchanged.')


def format_results_table(
    results: Iterable[LicenseFindingCurationResult],
    *,
    color: bool = False,
) -> str:
    """Format results as a string; see :func:`print_results_table`."""
    buf = StringIO()
    console = Console(file=buf, force_terminal=color, width=120)
    print_results_table(results, console=console)
    return buf.getvalue().rstrip('\n')
