from ghmd.reference.clean_path import decode_branch, encode_branch, parse_clean_path, to_clean_path
from ghmd.reference.disambiguator import BranchResolver
from ghmd.reference.parser import classify_kind, looks_like_clean_path, parse_github_url

__all__ = [
    'decode_branch',
    'encode_branch',
    'parse_clean_path',
    'to_clean_path',
    'BranchResolver',
    'classify_kind',
    'looks_like_clean_path',
    'parse_github_url',
]
