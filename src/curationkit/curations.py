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

"""License finding curations: human-authored overrides for scanner output.

A curation is a predicate plus an action.  The predicate selects
findings by path glob, detected license, start line and line count;
every predicate field is optional and an unset field matches anything.
The action either replaces the detected license with
:attr:`LicenseFindingCuration.concluded_license` or, when that value is
the SPDX ``NONE`` sentinel, removes the finding.

Curations are validated when they are constructed, so a malformed
curation file fails at load time rather than halfway through a run.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from curationkit._types import ValidationError
from curationkit.spdx_expr import NONE, ParseError, validate

__all__ = [
    'LicenseFindingCuration',
    'LicenseFindingCurationReason',
]


class LicenseFindingCurationReason(str, enum.Enum):
    """Why a curation was written."""

    # The finding is in source code that is not distributed.
    CODE = 'CODE'
    # The finding refers to the license of data, not of the code.
    DATA_OF = 'DATA_OF'
    # The finding is in documentation about a license.
    DOCUMENTATION_OF = 'DOCUMENTATION_OF'
    # The scanner detected the wrong license.
    INCORRECT = 'INCORRECT'
    # The scanner missed a license that is present.
    NOT_DETECTED = 'NOT_DETECTED'
    # The finding only references a license, e.g. in a comparison table.
    REFERENCE = 'REFERENCE'

    @classmethod
    def parse(cls, value: LicenseFindingCurationReason | str) -> LicenseFindingCurationReason:
        """Coerce *value* into a reason.

        Accepts a member, its exact name, or a case-insensitive spelling
        that uses hyphens or spaces instead of underscores.

        Raises:
            ValidationError: If *value* names no known reason.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper().replace('-', '_').replace(' ', '_')
            if key in cls.__members__:
                return cls[key]
        known = ', '.join(cls.__members__)
        raise ValidationError(f'unknown curation reason {value!r}; expected one of: {known}.')


@dataclass(frozen=True)
class LicenseFindingCuration:
    """A rule that relicenses or removes matching license findings.

    Attributes:
        concluded_license: The license that replaces the detected one,
            or ``"NONE"`` to remove matching findings.
        reason: Why the curation exists.
        path: Glob for the finding's path. ``**`` matches every path.
        start_lines: Allowed start lines; empty means any start line.
        line_count: Required number of lines; ``None`` means any.
        detected_license: Required detected license; ``None`` means any.
        comment: Free-text justification written by the curator.
    """

    concluded_license: str
    reason: LicenseFindingCurationReason
    path: str = '**'
    start_lines: tuple[int, ...] = field(default=())
    line_count: int | None = None
    detected_license: str | None = None
    comment: str = ''

    def __post_init__(self) -> None:
        """Normalize container fields and reject malformed values."""
        errors: list[str] = []

        try:
            object.__setattr__(self, 'reason', LicenseFindingCurationReason.parse(self.reason))
        except ValidationError as exc:
            errors.extend(exc.errors)

        if not isinstance(self.path, str) or not self.path.strip():
            errors.append('path must be a non-empty glob pattern.')

        # Ordered set: drop repeats, keep first-seen order.
        start_lines = tuple(dict.fromkeys(self.start_lines))
        object.__setattr__(self, 'start_lines', start_lines)
        for line in start_lines:
            if isinstance(line, bool) or not isinstance(line, int) or line < 1:
                errors.append(f'start_lines entries must be integers >= 1, got {line!r}.')

        if self.line_count is not None and (
            isinstance(self.line_count, bool) or not isinstance(self.line_count, int) or self.line_count < 1
        ):
            errors.append(f'line_count must be an integer >= 1, got {self.line_count!r}.')

        if self.detected_license is not None:
            errors.extend(_license_errors('detected_license', self.detected_license))

        if self.concluded_license != NONE:
            errors.extend(_license_errors('concluded_license', self.concluded_license))

        if not isinstance(self.comment, str):
            errors.append('comment must be a string.')

        if errors:
            raise ValidationError(errors)

    @property
    def removes(self) -> bool:
        """``True`` if matching findings are removed rather than relicensed."""
        return self.concluded_license == NONE


def _license_errors(name: str, value: object) -> list[str]:
    if not isinstance(value, str):
        return [f'{name} must be a string, got {type(value).__name__}.']
    try:
        validate(value)
    except ParseError as exc:
        return [f'{name} {value!r} is not a valid SPDX expression: {exc.detail}.']
    return []
