from ghmd.discovery.gitmodules import parse_gitmodules, parse_submodule_url
from ghmd.discovery.submodules import SubmoduleRecursor, TraversalContext

__all__ = ['parse_gitmodules', 'parse_submodule_url', 'SubmoduleRecursor', 'TraversalContext']
