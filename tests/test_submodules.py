from __future__ import annotations

import http.client
import unittest

from ghmd.constants import CIRCULAR_REFERENCE, FAILED_PLACEHOLDER
from ghmd.core.models import FileEntry
from ghmd.discovery.submodules import SubmoduleRecursor, TraversalContext

from fakes import FakeGitHub


def gitmodules(*entries: tuple) -> str:
    return ''.join(f'[submodule "{n}"]\n\tpath = {p}\n\turl = https://github.com/{r}.git\n' for n, p, r in entries)


def listing(gh: FakeGitHub, key: str, branch: str = 'main') -> list:
    return [FileEntry(path=p) for p in gh.repos[key]['branches'][branch]]


class SubmoduleRecursorTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.gh = FakeGitHub()
        self.recursor = SubmoduleRecursor(self.gh, self.gh, self.gh)

    async def test_no_gitmodules_means_no_work(self) -> None:
        self.gh.add_repo('o/top', {'README.md': 'hi'})
        self.assertEqual(await self.recursor.fetch('o', 'top', 'main', listing(self.gh, 'o/top')), [])
        self.assertEqual(self.gh.content_calls, [])

    async def test_files_are_prefixed_and_text_only(self) -> None:
        self.gh.add_repo('o/top', {'.gitmodules': gitmodules(('lib', 'vendor/lib', 'o/lib'))})
        self.gh.add_repo('o/lib', {'src/a.py': 'print(1)', 'logo.png': 'binary'}, branch='trunk')

        results = await self.recursor.fetch('o', 'top', 'main', listing(self.gh, 'o/top'))

        self.assertEqual(len(results), 1)
        self.assertIsNone(results[0].error)
        self.assertEqual([(f.path, f.content) for f in results[0].files], [('vendor/lib/src/a.py', 'print(1)')])
        self.assertIn(('o', 'lib', 'trunk', 'src/a.py'), self.gh.content_calls)

    async def test_cycle_is_reported_not_followed(self) -> None:
        self.gh.add_repo('o/a', {'.gitmodules': gitmodules(('b', 'deps/b', 'o/b')), 'a.md': 'A'})
        self.gh.add_repo('o/b', {'.gitmodules': gitmodules(('a', 'deps/a', 'o/a')), 'b.md': 'B'})

        results = await self.recursor.fetch('o', 'a', 'main', listing(self.gh, 'o/a'))

        self.assertEqual([r.submodule.key for r in results], ['o/b', 'o/a'])
        self.assertIsNone(results[0].error)
        self.assertEqual(results[1].error, CIRCULAR_REFERENCE)
        self.assertEqual(results[1].files, ())

    async def test_nested_paths_carry_full_prefix_chain(self) -> None:
        self.gh.add_repo('o/top', {'.gitmodules': gitmodules(('mid', 'outer', 'o/mid'))})
        self.gh.add_repo('o/mid', {'.gitmodules': gitmodules(('leaf', 'inner', 'o/leaf')), 'm.txt': 'M'})
        self.gh.add_repo('o/leaf', {'.gitmodules': gitmodules(('deep', 'deeper', 'o/deep')), 'x.rs': 'X'})
        self.gh.add_repo('o/deep', {'d.go': 'D'})

        results = await self.recursor.fetch('o', 'top', 'main', listing(self.gh, 'o/top'))

        paths = [f.path for r in results for f in r.files]
        self.assertIn('outer/m.txt', paths)
        self.assertIn('outer/inner/x.rs', paths)
        self.assertIn('outer/inner/.gitmodules', paths)
        # max depth 2: the third level is never entered
        self.assertFalse(any('deeper' in p for p in paths))
        self.assertEqual([r.submodule.key for r in results], ['o/mid', 'o/leaf'])

    async def test_depth_is_configurable(self) -> None:
        self.gh.add_repo('o/top', {'.gitmodules': gitmodules(('mid', 'outer', 'o/mid'))})
        self.gh.add_repo('o/mid', {'.gitmodules': gitmodules(('leaf', 'inner', 'o/leaf'))})
        self.gh.add_repo('o/leaf', {'x.rs': 'X'})
        shallow = SubmoduleRecursor(self.gh, self.gh, self.gh, max_depth=1)

        results = await shallow.fetch('o', 'top', 'main', listing(self.gh, 'o/top'))

        self.assertEqual([r.submodule.key for r in results], ['o/mid'])
        self.assertEqual(await shallow.fetch('o', 'top', 'main', listing(self.gh, 'o/top'), depth=1), [])

    async def test_file_cap_and_placeholders(self) -> None:
        files = {f'f{i:03}.md': str(i) for i in range(120)}
        self.gh.add_repo('o/top', {'.gitmodules': gitmodules(('big', 'big', 'o/big'))})
        self.gh.add_repo('o/big', files)
        self.gh.fail('o/big', 'f001.md')
        capped = SubmoduleRecursor(self.gh, self.gh, self.gh, file_cap=100)

        [result] = await capped.fetch('o', 'top', 'main', listing(self.gh, 'o/top'))

        self.assertEqual(len(result.files), 100)
        self.assertEqual(result.files[1].content, FAILED_PLACEHOLDER)
        self.assertEqual(result.files[2].content, '2')

    async def test_unexpected_file_error_becomes_placeholder(self) -> None:
        self.gh.add_repo('o/top', {'.gitmodules': gitmodules(('lib', 'lib', 'o/lib'))})
        self.gh.add_repo('o/lib', {'a.md': 'A', 'b.md': 'B'})
        self.gh.fail('o/lib', 'b.md', http.client.IncompleteRead(b'x', 10))

        [result] = await self.recursor.fetch('o', 'top', 'main', listing(self.gh, 'o/top'))

        self.assertIsNone(result.error)
        self.assertEqual(
            [(f.path, f.content) for f in result.files],
            [('lib/a.md', 'A'), ('lib/b.md', FAILED_PLACEHOLDER)],
        )

    async def test_unexpected_gitmodules_error_yields_nothing(self) -> None:
        self.gh.add_repo('o/top', {'.gitmodules': 'x'})
        self.gh.fail('o/top', '.gitmodules', UnicodeDecodeError('utf-8', b'\xff', 0, 1, 'invalid start byte'))
        self.assertEqual(await self.recursor.fetch('o', 'top', 'main', listing(self.gh, 'o/top')), [])

    async def test_failing_submodule_does_not_affect_siblings(self) -> None:
        self.gh.add_repo('o/top', {'.gitmodules': gitmodules(('gone', 'gone', 'o/gone'), ('ok', 'ok', 'o/ok'))})
        self.gh.add_repo('o/ok', {'a.md': 'A'})

        results = await self.recursor.fetch('o', 'top', 'main', listing(self.gh, 'o/top'))

        by_key = {r.submodule.key: r for r in results}
        self.assertIn('not found', by_key['o/gone'].error)
        self.assertEqual([f.path for f in by_key['o/ok'].files], ['ok/a.md'])

    async def test_unreadable_gitmodules_yields_nothing(self) -> None:
        self.gh.add_repo('o/top', {'.gitmodules': 'x'})
        self.gh.fail('o/top', '.gitmodules')
        self.assertEqual(await self.recursor.fetch('o', 'top', 'main', listing(self.gh, 'o/top')), [])

    async def test_visited_context_is_per_request(self) -> None:
        self.gh.add_repo('o/top', {'.gitmodules': gitmodules(('lib', 'lib', 'o/lib'))})
        self.gh.add_repo('o/lib', {'a.md': 'A'})
        ctx = TraversalContext()

        first = await self.recursor.fetch('o', 'top', 'main', listing(self.gh, 'o/top'), ctx=ctx)
        again = await self.recursor.fetch('o', 'top', 'main', listing(self.gh, 'o/top'), ctx=ctx)
        fresh = await self.recursor.fetch('o', 'top', 'main', listing(self.gh, 'o/top'))

        self.assertEqual(len(first), 1)
        self.assertEqual(again, [])
        self.assertEqual(fresh, first)
        self.assertEqual(ctx.visited, {'o/top'})
