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

"""Tests for license finding curations."""

from __future__ import annotations

import pytest
from curationkit._types import ValidationError
from curationkit.curations import LicenseFindingCuration, LicenseFindingCurationReason


class TestReason:
    """Tests for LicenseFindingCurationReason."""

    @pytest.mark.parametrize(
        ('raw', 'expected'),
        [
            ('INCORRECT', LicenseFindingCurationReason.INCORRECT),
            ('incorrect', LicenseFindingCurationReason.INCORRECT),
            ('not-detected', LicenseFindingCurationReason.NOT_DETECTED),
            ('Documentation of', LicenseFindingCurationReason.DOCUMENTATION_OF),
            (LicenseFindingCurationReason.CODE, LicenseFindingCurationReason.CODE),
        ],
    )
    def test_parse(self, raw: str, expected: LicenseFindingCurationReason) -> None:
        """Test parse."""
        assert LicenseFindingCurationReason.parse(raw) is expected

    def test_unknown_rejected(self) -> None:
        """Test unknown rejected."""
        with pytest.raises(ValidationError, match='unknown curation reason'):
            LicenseFindingCurationReason.parse('LICENSE_TEXT_MISMATCH')

    def test_non_string_rejected(self) -> None:
        """Test non string rejected."""
        with pytest.raises(ValidationError):
            LicenseFindingCurationReason.parse(3)  # type: ignore[arg-type]


class TestDefaults:
    """Tests for optional field defaults."""

    def test_defaults_are_unconstrained(self) -> None:
        """Test defaults are unconstrained."""
        c = LicenseFindingCuration(concluded_license='MIT', reason=LicenseFindingCurationReason.INCORRECT)
        assert c.path == '**'
        assert c.start_lines == ()
        assert c.line_count is None
        assert c.detected_license is None
        assert c.comment == ''

    def test_reason_string_is_coerced(self) -> None:
        """Test reason string is coerced."""
        c = LicenseFindingCuration(concluded_license='MIT', reason='reference')  # type: ignore[arg-type]
        assert c.reason is LicenseFindingCurationReason.REFERENCE

    def test_start_lines_are_an_ordered_set(self) -> None:
        """Test start lines are an ordered set."""
        c = LicenseFindingCuration(
            concluded_license='MIT',
            reason='INCORRECT',  # type: ignore[arg-type]
            start_lines=[9, 3, 9, 1, 3],  # type: ignore[arg-type]
        )
        assert c.start_lines == (9, 3, 1)

    def test_hashable(self) -> None:
        """Test hashable."""
        a = LicenseFindingCuration(concluded_license='MIT', reason='INCORRECT', start_lines=[1, 2])  # type: ignore[arg-type]
        b = LicenseFindingCuration(concluded_license='MIT', reason='INCORRECT', start_lines=(1, 2))  # type: ignore[arg-type]
        assert a == b
        assert len({a, b}) == 1


class TestRemoves:
    """Tests for the NONE sentinel."""

    def test_none_removes(self) -> None:
        """Test none removes."""
        assert LicenseFindingCuration(concluded_license='NONE', reason='CODE').removes  # type: ignore[arg-type]

    def test_sentinel_is_case_sensitive(self) -> None:
        """Test sentinel is case sensitive."""
        assert not LicenseFindingCuration(concluded_license='None', reason='CODE').removes  # type: ignore[arg-type]

    def test_other_license_does_not_remove(self) -> None:
        """Test other license does not remove."""
        assert not LicenseFindingCuration(concluded_license='MIT', reason='CODE').removes  # type: ignore[arg-type]


class TestValidation:
    """Tests for construction-time validation."""

    def test_invalid_concluded_license(self) -> None:
        """Test invalid concluded license."""
        with pytest.raises(ValidationError, match='concluded_license'):
            LicenseFindingCuration(concluded_license='MIT OR', reason='INCORRECT')  # type: ignore[arg-type]

    def test_empty_concluded_license(self) -> None:
        """Test empty concluded license."""
        with pytest.raises(ValidationError, match='concluded_license'):
            LicenseFindingCuration(concluded_license='', reason='INCORRECT')  # type: ignore[arg-type]

    def test_invalid_detected_license(self) -> None:
        """Test invalid detected license."""
        with pytest.raises(ValidationError, match='detected_license'):
            LicenseFindingCuration(
                concluded_license='MIT',
                detected_license='(Apache-2.0',
                reason='INCORRECT',  # type: ignore[arg-type]
            )

    def test_blank_path(self) -> None:
        """Test blank path."""
        with pytest.raises(ValidationError, match='path'):
            LicenseFindingCuration(concluded_license='MIT', reason='INCORRECT', path='  ')  # type: ignore[arg-type]

    @pytest.mark.parametrize('line', [0, -3, '8', True])
    def test_bad_start_line(self, line: object) -> None:
        """Test bad start line."""
        with pytest.raises(ValidationError, match='start_lines'):
            LicenseFindingCuration(
                concluded_license='MIT',
                reason='INCORRECT',  # type: ignore[arg-type]
                start_lines=(line,),  # type: ignore[arg-type]
            )

    @pytest.mark.parametrize('count', [0, -1, '6'])
    def test_bad_line_count(self, count: object) -> None:
        """Test bad line count."""
        with pytest.raises(ValidationError, match='line_count'):
            LicenseFindingCuration(
                concluded_license='MIT',
                reason='INCORRECT',  # type: ignore[arg-type]
                line_count=count,  # type: ignore[arg-type]
            )

    def test_all_errors_reported_together(self) -> None:
        """Test all errors reported together."""
        with pytest.raises(ValidationError) as exc_info:
            LicenseFindingCuration(
                concluded_license='MIT OR',
                reason='WHATEVER',  # type: ignore[arg-type]
                line_count=0,
            )
        assert len(exc_info.value.errors) == 3
