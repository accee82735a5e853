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

"""Glob matching of curation path patterns against finding paths.

Patterns are matched one path segment at a time:

    - ``**`` as a whole segment matches zero or more whole segments, so
      ``**/LICENSE`` matches ``LICENSE``, ``a/LICENSE`` and
      ``a/b/LICENSE``, and ``**`` alone matches every path.
    - Any other segment is matched with case-sensitive glob rules
      (``*``, ``?``, ``[...]``) that never cross a ``/``.

Backslashes are treated as separators and empty or ``.`` segments are
ignored, so ``./src//a.c`` and ``src\\a.c`` are both ``src/a.c``.

Usage::

    from curationkit.path_glob import match

    match('**/path', 'a/b/path')  # True
    match('src/*.c', 'src/sub/a.c')  # False
"""

from __future__ import annotations

import fnmatch
import functools

__all__ = [
    'is_literal',
    'match',
    'normalize',
]

_RECURSIVE = '**'
_WILDCARD_CHARS = frozenset('*?[')


def _segments(path: str) -> tuple[str, ...]:
    return tuple(s for s in path.replace('\\', '/').split('/') if s and s != '.')


def normalize(path: str) -> str:
    """Return *path* with forward slashes and no empty or ``.`` segments."""
    return '/'.join(_segments(path))


@functools.lru_cache(maxsize=4096)
def _compile(pattern: str) -> tuple[str, ...]:
    """Split *pattern* into segments, collapsing runs of ``**``."""
    compiled: list[str] = []
    for seg in _segments(pattern):
        if seg == _RECURSIVE and compiled and compiled[-1] == _RECURSIVE:
            continue
        compiled.append(seg)
    return tuple(compiled)


def is_literal(pattern: str) -> bool:
    """Return ``True`` if *pattern* contains no wildcard characters."""
    return not _WILDCARD_CHARS.intersection(pattern)


def match(pattern: str, path: str) -> bool:
    """Return ``True`` if the glob *pattern* matches *path*.

    Args:
        pattern: A glob pattern such as ``"**/vendor/*.js"``.
        path: A file path such as ``"web/vendor/jquery.js"``.
    """
    pat = _compile(pattern)
    if pat == (_RECURSIVE,):
        return True
    segs = _segments(path)

    # Wildcard matching over segments with single-point backtracking:
    # on a mismatch, let the most recent ``**`` swallow one more segment.
    pi = si = 0
    star_pi = -1
    star_si = 0
    while si < len(segs):
        if pi < len(pat) and pat[pi] == _RECURSIVE:
            star_pi, star_si = pi, si
            pi += 1
        elif pi < len(pat) and fnmatch.fnmatchcase(segs[si], pat[pi]):
            pi += 1
            si += 1
        elif star_pi >= 0:
            star_si += 1
            pi, si = star_pi + 1, star_si
        else:
            return False
    while pi < len(pat) and pat[pi] == _RECURSIVE:
        pi += 1
    return pi == len(pat)
