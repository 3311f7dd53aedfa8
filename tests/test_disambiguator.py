from __future__ import annotations

import unittest

from ghmd.core.errors import RateLimited
from ghmd.core.models import Reference
from ghmd.reference.disambiguator import BranchResolver

from fakes import FakeGitHub


class ResolveBranchAndPathTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.gh = FakeGitHub()
        self.gh.add_repo('o/r', {'src/a.ts': 'a'}, branch='main')
        self.gh.add_repo('o/r', {'src/a.ts': 'a'}, branch='release')
        self.gh.add_repo('o/r', {'src/a.ts': 'a'}, branch='release/1.0')
        self.resolver = BranchResolver(self.gh, self.gh)

    async def test_longest_candidate_wins(self) -> None:
        branch, path = await self.resolver.resolve_branch_and_path('o', 'r', ['release', '1.0', 'src'])
        self.assertEqual((branch, path), ('release/1.0', 'src'))
        self.assertEqual(
            [c[2] for c in self.gh.listing_calls],
            ['release/1.0/src', 'release/1.0'],
        )

    async def test_shorter_candidate_when_longer_missing(self) -> None:
        branch, path = await self.resolver.resolve_branch_and_path('o', 'r', ['main', 'src', 'a.ts'])
        self.assertEqual((branch, path), ('main', 'src/a.ts'))

    async def test_full_match_has_no_path(self) -> None:
        self.assertEqual(await self.resolver.resolve_branch_and_path('o', 'r', ['release', '1.0']), ('release/1.0', None))

    async def test_falls_back_to_default_branch_with_whole_path(self) -> None:
        self.gh.repos['o/r']['default'] = 'develop'
        branch, path = await self.resolver.resolve_branch_and_path('o', 'r', ['docs', 'guide'])
        self.assertEqual((branch, path), ('develop', 'docs/guide'))

    async def test_zero_segments_skip_probing(self) -> None:
        self.assertEqual(await self.resolver.resolve_branch_and_path('o', 'r', []), ('main', None))
        self.assertEqual(self.gh.listing_calls, [])

    async def test_non_not_found_errors_propagate(self) -> None:
        self.gh.rate_limited_branches.add('x/y')
        with self.assertRaises(RateLimited):
            await self.resolver.resolve_branch_and_path('o', 'r', ['x', 'y'])
        self.assertEqual(len(self.gh.listing_calls), 1)


class ResolveReferenceTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.gh = FakeGitHub()
        self.gh.add_repo('o/r', {'src/a.ts': 'a'}, branch='main')
        self.gh.add_repo('o/r', {'src/a.ts': 'a'}, branch='feature/x')
        self.resolver = BranchResolver(self.gh, self.gh)

    async def test_repo_reference_uses_default_branch(self) -> None:
        ref = await self.resolver.resolve(Reference(owner='o', repo='r', kind='repo'))
        self.assertEqual((ref.branch, ref.path, ref.kind), ('main', None, 'repo'))

    async def test_explicit_branch_without_path_is_trusted(self) -> None:
        ref = await self.resolver.resolve(Reference(owner='o', repo='r', kind='directory', branch='v1'))
        self.assertEqual((ref.branch, ref.path), ('v1', None))
        self.assertEqual(self.gh.listing_calls, [])

    async def test_tree_branch_with_slash_is_rejoined(self) -> None:
        ref = await self.resolver.resolve(Reference(owner='o', repo='r', kind='directory', branch='feature', path='x/src'))
        self.assertEqual((ref.branch, ref.path, ref.kind), ('feature/x', 'src', 'directory'))

    async def test_shorthand_directory_naming_a_branch_becomes_repo(self) -> None:
        ref = await self.resolver.resolve(Reference(owner='o', repo='r', kind='directory', path='feature/x'))
        self.assertEqual((ref.branch, ref.path, ref.kind), ('feature/x', None, 'repo'))

    async def test_shorthand_file(self) -> None:
        ref = await self.resolver.resolve(Reference(owner='o', repo='r', kind='file', path='src/a.ts'))
        self.assertEqual((ref.branch, ref.path, ref.kind), ('main', 'src/a.ts', 'file'))
        self.assertEqual(ref.label(), 'o/r@main/src/a.ts')
