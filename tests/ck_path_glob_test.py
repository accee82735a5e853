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

"""Tests for curation path glob matching."""

from __future__ import annotations

import pytest
from curationkit.path_glob import is_literal, match, normalize


class TestRecursiveWildcard:
    """Tests for the ``**`` segment."""

    @pytest.mark.parametrize('path', ['path', 'a/path', 'a/b/path', 'a/b/c/d/path'])
    def test_leading(self, path: str) -> None:
        """Test leading."""
        assert match('**/path', path)

    @pytest.mark.parametrize('path', ['', 'a', 'a/b/c', 'LICENSE', '.hidden/x'])
    def test_alone_matches_everything(self, path: str) -> None:
        """Test alone matches everything."""
        assert match('**', path)

    def test_trailing(self) -> None:
        """Test trailing."""
        assert match('docs/**', 'docs/a.md')
        assert match('docs/**', 'docs/sub/a.md')
        assert match('docs/**', 'docs')
        assert not match('docs/**', 'src/docs/a.md')

    def test_middle(self) -> None:
        """Test middle."""
        assert match('src/**/test/*.py', 'src/test/a.py')
        assert match('src/**/test/*.py', 'src/x/y/test/a.py')
        assert not match('src/**/test/*.py', 'src/x/y/test/sub/a.py')

    def test_repeated(self) -> None:
        """Test repeated."""
        assert match('**/**/path', 'path')
        assert match('a/**/b/**/c', 'a/x/b/y/z/c')
        assert not match('a/**/b/**/c', 'a/x/y/z/c')

    def test_backtracking(self) -> None:
        """Test backtracking."""
        assert match('**/a/b', 'a/a/a/b')
        assert not match('**/a/b', 'a/b/a')


class TestSegments:
    """Tests for literal and single-segment wildcard segments."""

    def test_literal(self) -> None:
        """Test literal."""
        assert match('a/path', 'a/path')
        assert not match('a/path', 'other/path')
        assert not match('a/path', 'a/path/more')
        assert not match('path', 'a/path')

    def test_no_substring_matching(self) -> None:
        """Test no substring matching."""
        assert not match('path', 'mypath')
        assert not match('a/pat', 'a/path')

    def test_star_stays_in_segment(self) -> None:
        """Test star stays in segment."""
        assert match('src/*.c', 'src/main.c')
        assert not match('src/*.c', 'src/sub/main.c')
        assert match('*/LICENSE', 'pkg/LICENSE')
        assert not match('*/LICENSE', 'LICENSE')

    def test_question_mark_and_class(self) -> None:
        """Test question mark and class."""
        assert match('file?.txt', 'file1.txt')
        assert not match('file?.txt', 'file12.txt')
        assert match('[ab]/x', 'b/x')
        assert not match('[ab]/x', 'c/x')

    def test_case_sensitive(self) -> None:
        """Test case sensitive."""
        assert not match('License', 'LICENSE')


class TestNormalization:
    """Tests for separator normalization."""

    def test_backslashes(self) -> None:
        """Test backslashes."""
        assert match('**/path', 'a\\b\\path')
        assert match('a\\path', 'a/path')

    def test_dot_and_empty_segments(self) -> None:
        """Test dot and empty segments."""
        assert match('a/path', './a//path')
        assert normalize('./a//b\\c/') == 'a/b/c'

    def test_is_literal(self) -> None:
        """Test is literal."""
        assert is_literal('a/b/LICENSE')
        assert not is_literal('**/LICENSE')
        assert not is_literal('a/?.c')
        assert not is_literal('a/[ab].c')
