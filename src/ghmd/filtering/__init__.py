from ghmd.filtering.filters import apply_filters, compile_patterns, parse_filter_params
from ghmd.filtering.patterns import FilterPattern, PatternKind, compile_pattern, matches_pattern
from ghmd.filtering.policy import filter_by_directory, filter_ignored, is_text_file

__all__ = [
    'apply_filters',
    'compile_patterns',
    'parse_filter_params',
    'FilterPattern',
    'PatternKind',
    'compile_pattern',
    'matches_pattern',
    'filter_by_directory',
    'filter_ignored',
    'is_text_file',
]
