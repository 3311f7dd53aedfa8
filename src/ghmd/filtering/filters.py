from __future__ import annotations
"""Include/exclude filters over repository listings.

Parameter semantics:
    * Each raw value is trimmed; blank values are dropped.
    * A value wrapped in braces is a list: "{.test.ts,.spec.ts}" yields
      [".test.ts", ".spec.ts"] (items trimmed, empties dropped).
    * Repeated parameters are concatenated in the order given.

Policy (two sequential stages):
    - If include patterns exist, keep only paths matching AT LEAST one.
    - Then drop every remaining path matching ANY exclude pattern.
"""

from typing import Iterable, List, Sequence, TypeVar, Union

from ghmd.filtering.patterns import FilterPattern, compile_pattern

T = TypeVar('T')
ParamValues = Union[str, Iterable[str], None]


def parse_filter_params(values: ParamValues) -> List[str]:
    """Flatten raw filter parameter values into a list of patterns."""
    if values is None:
        return []
    if isinstance(values, str):
        values = [values]
    out: List[str] = []
    for raw in values:
        v = (raw or '').strip()
        if not v:
            continue
        if v.startswith('{') and v.endswith('}'):
            out.extend(s.strip() for s in v[1:-1].split(',') if s.strip())
        else:
            out.append(v)
    return out


def compile_patterns(values: ParamValues) -> List[FilterPattern]:
    return [compile_pattern(p) for p in parse_filter_params(values)]


def _path_of(item) -> str:
    return item if isinstance(item, str) else item.path


def apply_filters(files: Sequence[T], exclude: ParamValues = None, include: ParamValues = None) -> List[T]:
    """Apply include (allowlist) then exclude (denylist) to *files*.

    Items may be plain path strings or objects exposing a ``path`` attribute.
    """
    result = list(files)

    include_patterns = compile_patterns(include)
    if include_patterns:
        result = [f for f in result if any(p.matches(_path_of(f)) for p in include_patterns)]

    exclude_patterns = compile_patterns(exclude)
    if exclude_patterns:
        result = [f for f in result if not any(p.matches(_path_of(f)) for p in exclude_patterns)]

    return result
