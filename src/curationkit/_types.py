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

"""Shared leaf-level types used across curationkit.

This module must have **zero** imports from other ``curationkit``
modules to avoid circular-import chains.  It is safe to import from
any module in the project.

Line numbers are 1-based and inclusive on both ends, so a finding
that covers a single line has ``start_line == end_line``.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    'LicenseFinding',
    'TextLocation',
    'ValidationError',
]


class ValidationError(ValueError):
    """Raised when a data type is constructed from malformed input.

    Attributes:
        errors: List of human-readable error strings.
    """

    def __init__(self, errors: list[str] | str) -> None:
        """Initialize with one or more error strings."""
        self.errors = [errors] if isinstance(errors, str) else list(errors)
        if len(self.errors) == 1:
            super().__init__(self.errors[0])
        else:
            bullet_list = '\n'.join(f'  - {e}' for e in self.errors)
            super().__init__(f'{len(self.errors)} validation error(s):\n{bullet_list}')


@dataclass(frozen=True, order=True)
class TextLocation:
    """A range of lines within a file.

    Attributes:
        path: Path of the file, relative to the scanned root.
        start_line: First line of the range (1-based).
        end_line: Last line of the range (inclusive).
    """

    path: str
    start_line: int
    end_line: int

    def __post_init__(self) -> None:
        """Reject ranges that are empty or start before line 1."""
        if self.start_line < 1:
            raise ValidationError(f'start_line must be >= 1, got {self.start_line} for {self.path!r}.')
        if self.start_line > self.end_line:
            raise ValidationError(
                f'start_line {self.start_line} is after end_line {self.end_line} for {self.path!r}.',
            )

    @property
    def line_count(self) -> int:
        """Number of lines covered by this location."""
        return self.end_line - self.start_line + 1

    def __str__(self) -> str:
        """Return ``path:start-end``."""
        return f'{self.path}:{self.start_line}-{self.end_line}'


@dataclass(frozen=True)
class LicenseFinding:
    """A license detected by a scanner at a specific location.

    The license is kept exactly as the scanner reported it. It is an
    opaque string for matching purposes and is never normalized.

    Attributes:
        license: The detected license expression.
        location: Where the license was detected.
    """

    license: str
    location: TextLocation

    def sort_key(self) -> tuple[TextLocation, str]:
        """Key that orders findings by location, then license."""
        return (self.location, self.license)
