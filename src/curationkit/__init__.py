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

"""curationkit: reconcile detected license findings with curations.

Usage::

    from curationkit import FindingCurationMatcher, load_curations, load_findings

    results = FindingCurationMatcher().apply_all(
        load_findings('scan.json'),
        load_curations('.curations.yml'),
    )
"""

from curationkit._types import LicenseFinding, TextLocation, ValidationError
from curationkit.curations import LicenseFindingCuration, LicenseFindingCurationReason
from curationkit.loader import LoadError, load_curations, load_findings
from curationkit.matcher import (
    Curated,
    CurationIndex,
    FindingCurationMatcher,
    LicenseFindingCurationResult,
    Removed,
)

__all__ = [
    'Curated',
    'CurationIndex',
    'FindingCurationMatcher',
    'LicenseFinding',
    'LicenseFindingCuration',
    'LicenseFindingCurationReason',
    'LicenseFindingCurationResult',
    'LoadError',
    'Removed',
    'TextLocation',
    'ValidationError',
    'load_curations',
    'load_findings',
]
