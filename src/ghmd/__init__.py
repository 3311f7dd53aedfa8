from __future__ import annotations

__version__ = '0.1.0'

from ghmd.aggregator import AggregationResult, Aggregator
from ghmd.cli import Ghmd
from ghmd.constants import HEADER_DELIM
from ghmd.discovery.submodules import SubmoduleRecursor, TraversalContext
from ghmd.execution.mapper import map_bounded
from ghmd.filtering.filters import apply_filters, parse_filter_params
from ghmd.filtering.patterns import matches_pattern
from ghmd.reference.clean_path import parse_clean_path, to_clean_path
from ghmd.reference.disambiguator import BranchResolver
from ghmd.reference.parser import parse_github_url
from ghmd.runtime.config import GhmdConfig
from ghmd.runtime.wiring import build_aggregator, build_services

__all__ = [
    '__version__',
    'AggregationResult',
    'Aggregator',
    'Ghmd',
    'HEADER_DELIM',
    'SubmoduleRecursor',
    'TraversalContext',
    'map_bounded',
    'apply_filters',
    'parse_filter_params',
    'matches_pattern',
    'parse_clean_path',
    'to_clean_path',
    'BranchResolver',
    'parse_github_url',
    'GhmdConfig',
    'build_aggregator',
    'build_services',
]
