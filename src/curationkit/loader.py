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

r"""Load curations and findings from YAML, TOML and JSON files.

Curation files are maintained by hand next to the scanned project.
Any of these shapes is accepted::

    # YAML, repository configuration style
    curations:
      license_findings:
        - path: "src/**/*.c"
          start_lines: "8, 12"
          line_count: 6
          detected_license: "GPL-2.0-only"
          concluded_license: "MIT"
          reason: "INCORRECT"
          comment: "Scanner mistook the MIT header for GPL."

    # TOML
    [[license_findings]]
    path = "docs/**"
    concluded_license = "NONE"
    reason = "DOCUMENTATION_OF"

A bare list of curation objects is accepted too.  ``start_lines`` may be
a list of integers or a comma-separated string.  Unknown keys and
invalid values raise :class:`~curationkit._types.ValidationError`,
prefixed with the entry's position in the file.

Findings files hold a list of ``{license, location: {path, start_line,
end_line}}`` objects (or the flat form ``{license, path, start_line,
end_line}``), optionally wrapped in ``{"licenses": [...]}`` or
``{"findings": [...]}``.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import yaml

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from curationkit._types import LicenseFinding, TextLocation, ValidationError
from curationkit.curations import LicenseFindingCuration
from curationkit.logging import get_logger

__all__ = [
    'LoadError',
    'curation_from_mapping',
    'curations_from_data',
    'finding_from_mapping',
    'findings_from_data',
    'load_curations',
    'load_findings',
]

logger = get_logger(__name__)

_CURATION_FIELDS = frozenset({
    'path',
    'start_lines',
    'line_count',
    'detected_license',
    'concluded_license',
    'reason',
    'comment',
})

_FINDING_FIELDS = frozenset({'license', 'location', 'path', 'start_line', 'end_line'})
_LOCATION_FIELDS = frozenset({'path', 'start_line', 'end_line'})


class LoadError(ValueError):
    """Raised when a file cannot be read or has an unsupported layout.

    Attributes:
        path: The file that failed to load.
    """

    def __init__(self, path: Path, detail: str) -> None:
        """Initialize with the offending file and a description."""
        self.path = path
        super().__init__(f'{path}: {detail}')


# ── Parsing helpers ──────────────────────────────────────────────────


def _read_document(path: Path) -> Any:  # noqa: ANN401
    """Parse *path* as YAML, TOML or JSON based on its suffix."""
    suffix = path.suffix.lower()
    try:
        if suffix == '.toml':
            with path.open('rb') as f:
                return tomllib.load(f)
        text = path.read_text(encoding='utf-8')
        if suffix == '.json':
            return json.loads(text)
        if suffix in {'.yml', '.yaml'}:
            return yaml.safe_load(text)
    except OSError as exc:
        raise LoadError(path, f'cannot read file: {exc.strerror or exc}') from exc
    except UnicodeDecodeError as exc:
        raise LoadError(path, f'file is not valid UTF-8 (byte offset {exc.start})') from exc
    except (tomllib.TOMLDecodeError, json.JSONDecodeError, yaml.YAMLError) as exc:
        raise LoadError(path, f'cannot parse {suffix[1:].upper()}: {exc}') from exc
    raise LoadError(path, f'unsupported file type {suffix!r}; use .yml, .yaml, .toml or .json')


def _parse_start_lines(value: object) -> tuple[int, ...]:
    if value is None:
        return ()
    if isinstance(value, int) and not isinstance(value, bool):
        return (value,)
    if isinstance(value, str):
        parts = [p.strip() for p in value.split(',') if p.strip()]
        try:
            return tuple(int(p) for p in parts)
        except ValueError as exc:
            raise ValidationError(f'start_lines {value!r} is not a comma-separated list of integers.') from exc
    if isinstance(value, (list, tuple)):
        for line in value:
            if isinstance(line, bool) or not isinstance(line, int):
                raise ValidationError(f'start_lines entries must be integers, got {line!r}.')
        return tuple(value)
    raise ValidationError(f'start_lines must be a list or a comma-separated string, got {type(value).__name__}.')


def _check_keys(data: Mapping[str, Any], allowed: frozenset[str], what: str) -> None:
    unknown = sorted(set(data) - allowed, key=str)
    if unknown:
        raise ValidationError(f'unknown {what} field(s): {", ".join(map(str, unknown))}.')


# ── Curations ────────────────────────────────────────────────────────


def curation_from_mapping(data: Mapping[str, Any]) -> LicenseFindingCuration:
    """Build a curation from one decoded curation object.

    Raises:
        ValidationError: If a field is unknown, missing or malformed.
    """
    if not isinstance(data, Mapping):
        raise ValidationError(f'a curation must be a mapping, got {type(data).__name__}.')
    _check_keys(data, _CURATION_FIELDS, 'curation')
    missing = [k for k in ('concluded_license', 'reason') if data.get(k) is None]
    if missing:
        raise ValidationError(f'missing required curation field(s): {", ".join(missing)}.')
    return LicenseFindingCuration(
        path='**' if data.get('path') is None else data['path'],
        start_lines=_parse_start_lines(data.get('start_lines')),
        line_count=data.get('line_count'),
        detected_license=data.get('detected_license'),
        concluded_license=data['concluded_license'],
        reason=data['reason'],
        comment=data.get('comment') or '',
    )


def _curation_entries(data: object) -> list[Any]:
    if data is None:
        return []
    if isinstance(data, list):
        return data
    if isinstance(data, Mapping):
        if 'curations' in data:
            return _curation_entries(data['curations'])
        if 'license_findings' in data:
            entries = data['license_findings']
            if entries is None:
                return []
            if isinstance(entries, list):
                return entries
    raise ValidationError('expected a list of curations or a "license_findings" list.')


def curations_from_data(data: object) -> list[LicenseFindingCuration]:
    """Build curations from a decoded document, in document order.

    Raises:
        ValidationError: For the first malformed entry, prefixed with
            its index.
    """
    curations: list[LicenseFindingCuration] = []
    for i, entry in enumerate(_curation_entries(data)):
        try:
            curations.append(curation_from_mapping(entry))
        except ValidationError as exc:
            raise ValidationError([f'curation #{i}: {e}' for e in exc.errors]) from exc
    return curations


def load_curations(paths: Path | str | Iterable[Path | str]) -> list[LicenseFindingCuration]:
    """Load curations from one or more files.

    Curations from several files are concatenated in the order given,
    which is also the order they are applied and reported in.

    Raises:
        LoadError: If a file cannot be read or parsed.
        ValidationError: If a curation is malformed.
    """
    if isinstance(paths, (str, Path)):
        paths = [paths]
    curations: list[LicenseFindingCuration] = []
    for p in paths:
        path = Path(p)
        try:
            loaded = curations_from_data(_read_document(path))
        except ValidationError as exc:
            raise ValidationError([f'{path}: {e}' for e in exc.errors]) from exc
        logger.info('curations_loaded', path=str(path), count=len(loaded))
        curations.extend(loaded)
    return curations


# ── Findings ─────────────────────────────────────────────────────────


def finding_from_mapping(data: Mapping[str, Any]) -> LicenseFinding:
    """Build a finding from one decoded finding object.

    Raises:
        ValidationError: If a field is unknown, missing or malformed.
    """
    if not isinstance(data, Mapping):
        raise ValidationError(f'a finding must be a mapping, got {type(data).__name__}.')
    _check_keys(data, _FINDING_FIELDS, 'finding')
    location = data.get('location', data)
    if not isinstance(location, Mapping):
        raise ValidationError('finding location must be a mapping.')
    if location is not data:
        _check_keys(location, _LOCATION_FIELDS, 'location')
    license_ = data.get('license')
    if not isinstance(license_, str) or not license_:
        raise ValidationError('finding license must be a non-empty string.')
    try:
        path = location['path']
        start_line = location['start_line']
        end_line = location.get('end_line', start_line)
    except KeyError as exc:
        raise ValidationError(f'missing finding field: {exc.args[0]}.') from exc
    if not isinstance(path, str):
        raise ValidationError('finding path must be a string.')
    for name, value in (('start_line', start_line), ('end_line', end_line)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(f'finding {name} must be an integer, got {value!r}.')
    return LicenseFinding(license=license_, location=TextLocation(path, start_line, end_line))


def findings_from_data(data: object) -> list[LicenseFinding]:
    """Build findings from a decoded document, in document order."""
    if isinstance(data, Mapping):
        for key in ('licenses', 'findings'):
            if key in data:
                data = data[key]
                break
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValidationError('expected a list of findings.')
    findings: list[LicenseFinding] = []
    for i, entry in enumerate(data):
        try:
            findings.append(finding_from_mapping(entry))
        except ValidationError as exc:
            raise ValidationError([f'finding #{i}: {e}' for e in exc.errors]) from exc
    return findings


def load_findings(path: Path | str) -> list[LicenseFinding]:
    """Load scanner findings from a JSON or YAML file.

    Raises:
        LoadError: If the file cannot be read or parsed.
        ValidationError: If a finding is malformed.
    """
    path = Path(path)
    try:
        findings = findings_from_data(_read_document(path))
    except ValidationError as exc:
        raise ValidationError([f'{path}: {e}' for e in exc.errors]) from exc
    logger.info('findings_loaded', path=str(path), count=len(findings))
    return findings
