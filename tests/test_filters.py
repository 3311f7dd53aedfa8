from __future__ import annotations

import unittest

from ghmd.core.models import FileEntry
from ghmd.filtering.filters import apply_filters, parse_filter_params
from ghmd.filtering.patterns import PatternKind, compile_pattern, matches_pattern
from ghmd.filtering.policy import filter_by_directory, filter_ignored, is_text_file

FILES = [
    FileEntry(path='src/index.ts', sha='a', size=100),
    FileEntry(path='src/index.test.ts', sha='b', size=100),
    FileEntry(path='src/utils/helper.ts', sha='c', size=100),
    FileEntry(path='src/utils/helper.spec.ts', sha='d', size=100),
    FileEntry(path='README.md', sha='f', size=100),
]


def _paths(files):
    return [f.path for f in files]


class ParseFilterParamsTests(unittest.TestCase):
    def test_empty_values(self) -> None:
        self.assertEqual(parse_filter_params(None), [])
        self.assertEqual(parse_filter_params([]), [])
        self.assertEqual(parse_filter_params(['', '   ']), [])

    def test_single_and_braced(self) -> None:
        self.assertEqual(parse_filter_params(['.test.ts']), ['.test.ts'])
        self.assertEqual(parse_filter_params(['{.test.ts}']), ['.test.ts'])
        self.assertEqual(parse_filter_params('.test.ts'), ['.test.ts'])

    def test_repeated_and_braced_are_concatenated_in_order(self) -> None:
        self.assertEqual(
            parse_filter_params(['{.test.ts, .spec.ts,}', ' .e2e.ts ']),
            ['.test.ts', '.spec.ts', '.e2e.ts'],
        )


class MatchesPatternTests(unittest.TestCase):
    def test_suffix(self) -> None:
        self.assertTrue(matches_pattern('src/foo.test.ts', '.test.ts'))
        self.assertFalse(matches_pattern('src/foo.ts', '.test.ts'))

    def test_directory(self) -> None:
        self.assertTrue(matches_pattern('test/foo.ts', 'test/'))
        self.assertTrue(matches_pattern('src/test/foo.ts', 'test/'))
        self.assertFalse(matches_pattern('testing/foo.ts', 'test/'))
        self.assertTrue(matches_pattern('pkg/src/utils/a.ts', 'src/utils'))

    def test_exact_name_or_substring(self) -> None:
        self.assertTrue(matches_pattern('src/README.md', 'README.md'))
        self.assertFalse(matches_pattern('README.txt', 'README.md'))
        self.assertTrue(matches_pattern('src/fixtures/a.ts', 'fixtures'))

    def test_glob(self) -> None:
        self.assertTrue(matches_pattern('foo.test.ts', '*.test.*'))
        self.assertTrue(matches_pattern('src/deep/foo.test.ts', '*.test.*'))
        self.assertFalse(matches_pattern('foo.ts', '*.test.*'))
        self.assertTrue(matches_pattern('a+b(1).ts', 'a+b(*).ts'))

    def test_kind_precedence(self) -> None:
        self.assertIs(compile_pattern('.*').kind, PatternKind.GLOB)
        self.assertIs(compile_pattern('./').kind, PatternKind.SUFFIX)
        self.assertIs(compile_pattern('src/').kind, PatternKind.DIRECTORY)
        self.assertIs(compile_pattern('src/a').kind, PatternKind.DIRECTORY)
        self.assertIs(compile_pattern('index').kind, PatternKind.SEGMENT)


class ApplyFiltersTests(unittest.TestCase):
    def test_no_filters_returns_all(self) -> None:
        self.assertEqual(apply_filters(FILES, None, None), FILES)

    def test_exclude_brace_syntax(self) -> None:
        self.assertEqual(
            _paths(apply_filters(FILES, ['{.test.ts,.spec.ts}'], None)),
            ['src/index.ts', 'src/utils/helper.ts', 'README.md'],
        )

    def test_exclude_repeated_params(self) -> None:
        self.assertEqual(
            _paths(apply_filters(FILES, ['.test.ts', '.spec.ts'], None)),
            ['src/index.ts', 'src/utils/helper.ts', 'README.md'],
        )

    def test_include_directory(self) -> None:
        self.assertEqual(
            _paths(apply_filters(FILES, None, ['src/utils/'])),
            ['src/utils/helper.ts', 'src/utils/helper.spec.ts'],
        )

    def test_include_then_exclude(self) -> None:
        self.assertEqual(
            _paths(apply_filters(FILES, ['.test.ts', '.spec.ts'], ['.ts'])),
            ['src/index.ts', 'src/utils/helper.ts'],
        )

    def test_exclusion_only_sees_included_files(self) -> None:
        self.assertEqual(apply_filters(FILES, ['.ts'], ['{.test.ts,.spec.ts}']), [])

    def test_plain_strings_accepted(self) -> None:
        self.assertEqual(apply_filters(['a.py', 'b.md'], '.md'), ['a.py'])


class PolicyTests(unittest.TestCase):
    def test_is_text_file(self) -> None:
        self.assertTrue(is_text_file('src/app.PY'))
        self.assertTrue(is_text_file('Dockerfile'))
        self.assertTrue(is_text_file('sub/.gitmodules'))
        self.assertFalse(is_text_file('assets/logo.png'))
        self.assertFalse(is_text_file('bin/tool'))

    def test_webassembly_binary_is_not_text(self) -> None:
        self.assertFalse(is_text_file('pkg/module.wasm'))
        self.assertTrue(is_text_file('pkg/module.wat'))

    def test_filter_ignored(self) -> None:
        files = [FileEntry(path=p) for p in (
            'node_modules/x/index.js', 'src/node_modules_helper.js', 'package-lock.json',
            'web/package-lock.json', '.github/workflows/ci.yml', '.github/CODEOWNERS', 'src/a.ts',
        )]
        self.assertEqual(
            _paths(filter_ignored(files)),
            ['src/node_modules_helper.js', '.github/CODEOWNERS', 'src/a.ts'],
        )

    def test_filter_by_directory(self) -> None:
        self.assertEqual(_paths(filter_by_directory(FILES, 'src/utils/')), ['src/utils/helper.ts', 'src/utils/helper.spec.ts'])
        self.assertEqual(filter_by_directory(FILES, 'src/ut'), [])
