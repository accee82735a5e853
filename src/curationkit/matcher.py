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

r"""Apply license finding curations to scanner findings.

Key Concepts (ELI5)::

    ┌─────────────────────┬──────────────────────────────────────────────┐
    │ Concept             │ Plain-English                                │
    ├─────────────────────┼──────────────────────────────────────────────┤
    │ Finding             │ "The scanner saw license X at file:lines."   │
    ├─────────────────────┼──────────────────────────────────────────────┤
    │ Curation            │ "When you see X at a file like this, it is   │
    │                     │ really Y" (or "it is not a license at all"). │
    ├─────────────────────┼──────────────────────────────────────────────┤
    │ Outcome             │ What one curation does to one finding:       │
    │                     │ Curated(new finding) or Removed(finding).    │
    ├─────────────────────┼──────────────────────────────────────────────┤
    │ Provenance          │ The (finding, curation) pairs that produced  │
    │                     │ an outcome. Empty for untouched findings.    │
    └─────────────────────┴──────────────────────────────────────────────┘

Every (finding, matching curation) pair yields its own outcome; curations
are never chained or short-circuited.  Identical outcomes are then merged
into one :class:`LicenseFindingCurationResult` whose provenance lists
every pair that produced it, in the order the pairs were discovered
(findings in input order, then curations in input order).

A removal is identified by the finding it removes, so two unrelated
findings removed by curations stay two separate results.  Likewise an
untouched finding always keeps its own pass-through result, even when a
curation turns another finding into an identical one.

Usage::

    from curationkit.matcher import FindingCurationMatcher

    matcher = FindingCurationMatcher()
    results = matcher.apply_all(findings, curations)
    for r in results:
        print(r.curated_finding, len(r.original_findings))
"""

from __future__ import annotations

import heapq
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from curationkit import path_glob
from curationkit._types import LicenseFinding
from curationkit.curations import LicenseFindingCuration
from curationkit.logging import get_logger

__all__ = [
    'Curated',
    'CurationIndex',
    'CurationOutcome',
    'FindingCurationMatcher',
    'LicenseFindingCurationResult',
    'Provenance',
    'Removed',
]

logger = get_logger(__name__)


@dataclass(frozen=True)
class Curated:
    """Outcome that keeps a finding, possibly under a new license.

    Attributes:
        finding: The resulting finding.
    """

    finding: LicenseFinding


@dataclass(frozen=True)
class Removed:
    """Outcome that removes a finding.

    Attributes:
        original: The finding that was removed.
    """

    original: LicenseFinding


CurationOutcome = Curated | Removed

Provenance = tuple[tuple[LicenseFinding, LicenseFindingCuration], ...]


@dataclass(frozen=True)
class LicenseFindingCurationResult:
    """One distinct curated outcome and the decisions behind it.

    Attributes:
        outcome: The curated finding, or the removal of a finding.
        original_findings: Every ``(finding, curation)`` pair that
            produced :attr:`outcome`. Empty when no curation matched,
            in which case the outcome is the untouched finding.
    """

    outcome: CurationOutcome
    original_findings: Provenance = ()

    @classmethod
    def pass_through(cls, finding: LicenseFinding) -> LicenseFindingCurationResult:
        """Result for a finding that no curation matched."""
        return cls(outcome=Curated(finding))

    @property
    def curated_finding(self) -> LicenseFinding | None:
        """The resulting finding, or ``None`` if it was removed."""
        if isinstance(self.outcome, Curated):
            return self.outcome.finding
        return None

    @property
    def removed(self) -> bool:
        """``True`` if the outcome is a removal."""
        return isinstance(self.outcome, Removed)

    @property
    def curated(self) -> bool:
        """``True`` if at least one curation produced this outcome."""
        return bool(self.original_findings)


class CurationIndex:
    """Buckets curations so each finding is tested against few candidates.

    Curations are keyed by ``(detected_license, literal_path)`` where
    either part is ``None`` when the curation does not pin it down (no
    detected license, or a path pattern with wildcards).  A finding can
    only match curations from the four buckets that agree with its own
    license and path, so only those are returned.  Candidates come back
    in their original input order, which keeps provenance order stable.

    The index only prunes; callers still run the full predicate.
    """

    def __init__(self, curations: Sequence[LicenseFindingCuration]) -> None:
        """Build the buckets for *curations*."""
        self._curations = tuple(curations)
        self._buckets: dict[tuple[str | None, str | None], list[int]] = {}
        for i, c in enumerate(self._curations):
            path = path_glob.normalize(c.path) if path_glob.is_literal(c.path) else None
            self._buckets.setdefault((c.detected_license, path), []).append(i)

    def __len__(self) -> int:
        """Number of indexed curations."""
        return len(self._curations)

    def candidates(self, finding: LicenseFinding) -> list[LicenseFindingCuration]:
        """Return curations that may match *finding*, in input order."""
        path = path_glob.normalize(finding.location.path)
        keys = {
            (finding.license, path),
            (finding.license, None),
            (None, path),
            (None, None),
        }
        buckets = [self._buckets[k] for k in keys if k in self._buckets]
        return [self._curations[i] for i in heapq.merge(*buckets)]


class FindingCurationMatcher:
    """Stateless matcher that applies curations to findings."""

    def matches(self, finding: LicenseFinding, curation: LicenseFindingCuration) -> bool:
        """Return ``True`` if *curation* applies to *finding*.

        All constraints must hold; an unset constraint always holds.
        """
        location = finding.location
        return (
            (curation.detected_license is None or curation.detected_license == finding.license)
            and (not curation.start_lines or location.start_line in curation.start_lines)
            and (curation.line_count is None or curation.line_count == location.line_count)
            and path_glob.match(curation.path, location.path)
        )

    def outcome(self, finding: LicenseFinding, curation: LicenseFindingCuration) -> CurationOutcome:
        """Return what *curation* does to *finding*, assuming it matches."""
        if curation.removes:
            return Removed(finding)
        return Curated(LicenseFinding(license=curation.concluded_license, location=finding.location))

    def apply(self, finding: LicenseFinding, curation: LicenseFindingCuration) -> LicenseFinding | None:
        """Apply a single curation to a single finding.

        Returns:
            *finding* unchanged if the curation does not match, ``None``
            if it matches and removes the finding, otherwise a new
            finding with the concluded license at the same location.
        """
        if not self.matches(finding, curation):
            return finding
        result = self.outcome(finding, curation)
        return result.finding if isinstance(result, Curated) else None

    def _pending(
        self,
        finding: LicenseFinding,
        index: CurationIndex,
    ) -> list[tuple[CurationOutcome, Provenance]]:
        """Pending results for one finding, one per matching curation."""
        matching = [c for c in index.candidates(finding) if self.matches(finding, c)]
        if not matching:
            return [(Curated(finding), ())]
        return [(self.outcome(finding, c), ((finding, c),)) for c in matching]

    def apply_all(
        self,
        findings: Iterable[LicenseFinding],
        curations: Iterable[LicenseFindingCuration],
        *,
        workers: int | None = None,
    ) -> set[LicenseFindingCurationResult]:
        """Apply all curations to all findings and group the outcomes.

        Args:
            findings: Findings to curate. Not modified.
            curations: Curations to apply. Not modified.
            workers: If greater than 1, match findings on a thread pool
                of this size. The result is the same for any value.

        Returns:
            One result per distinct outcome. A finding matched by no
            curation appears as a pass-through result with empty
            provenance. The set has no meaningful order; use
            :func:`curationkit.report.sort_results` for display.
        """
        findings = tuple(findings)
        index = CurationIndex(tuple(curations))

        if workers is not None and workers > 1 and len(findings) > 1:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                # map() yields in submission order, so the merge below
                # sees pairs in the same order as the sequential path.
                per_finding = list(pool.map(lambda f: self._pending(f, index), findings))
        else:
            per_finding = [self._pending(f, index) for f in findings]

        # Untouched findings are keyed apart from curated outcomes so a
        # curation that lands on an existing finding never hides it.
        groups: dict[tuple[CurationOutcome, bool], list[tuple[LicenseFinding, LicenseFindingCuration]]] = {}
        for pending in per_finding:
            for outcome, provenance in pending:
                groups.setdefault((outcome, bool(provenance)), []).extend(provenance)

        results = {
            LicenseFindingCurationResult(outcome=outcome, original_findings=tuple(pairs))
            for (outcome, _), pairs in groups.items()
        }
        logger.debug(
            'curations_applied',
            findings=len(findings),
            curations=len(index),
            results=len(results),
            curated=sum(1 for r in results if r.curated and not r.removed),
            removed=sum(1 for r in results if r.removed),
        )
        return results
