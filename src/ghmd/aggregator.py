from __future__ import annotations
"""
Aggregation of a GitHub reference into a single text document.

Order of operations for a directory or repository reference:

    resolve → list → scope to sub-path → include/exclude → drop ignored and
    non-text entries → fetch contents (bounded) → submodules (optional) →
    render

File references skip the listing and return the raw file text.

Only resolution, the top-level listing and a single-file fetch may fail the
whole request. Per-file failures become placeholder sections and per-
submodule failures become inline error markers.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Awaitable, List, Optional, Tuple

from ghmd.constants import (
    DEFAULT_CONCURRENCY,
    DEFAULT_MAX_SUBMODULE_DEPTH,
    DEFAULT_SUBMODULE_FILE_CAP,
)
from ghmd.core.errors import InvalidCleanPath, describe
from ghmd.core.interfaces.net import (
    ContentServiceProtocol,
    ListingServiceProtocol,
    MetadataServiceProtocol,
)
from ghmd.core.models import FileEntry, OutputFormat, ResolvedReference, SubmoduleResult
from ghmd.discovery.submodules import SubmoduleRecursor, TraversalContext
from ghmd.execution.mapper import map_bounded
from ghmd.filtering.filters import ParamValues, apply_filters
from ghmd.filtering.policy import filter_by_directory, filter_ignored, is_text_file
from ghmd.logging.helpers import get_logger
from ghmd.reference.clean_path import parse_clean_path, to_clean_path
from ghmd.reference.disambiguator import BranchResolver
from ghmd.reference.parser import parse_github_url
from ghmd.rendering.renderer import DocumentRenderer, FileSection


@dataclass(frozen=True)
class AggregationResult:
    text: str
    reference: ResolvedReference
    file_count: int = 0
    failed_paths: Tuple[str, ...] = ()
    submodules: Tuple[SubmoduleResult, ...] = ()


class Aggregator:
    def __init__(
        self,
        listing: ListingServiceProtocol,
        content: ContentServiceProtocol,
        metadata: MetadataServiceProtocol,
        *,
        concurrency: int = DEFAULT_CONCURRENCY,
        max_submodule_depth: int = DEFAULT_MAX_SUBMODULE_DEPTH,
        submodule_file_cap: int = DEFAULT_SUBMODULE_FILE_CAP,
        resolver: Optional[BranchResolver] = None,
        recursor: Optional[SubmoduleRecursor] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._listing = listing
        self._content = content
        self._metadata = metadata
        self._concurrency = concurrency
        self._log = logger or get_logger('aggregator')
        self._resolver = resolver or BranchResolver(listing, metadata, logger=self._log)
        self._recursor = recursor or SubmoduleRecursor(
            listing,
            content,
            metadata,
            max_depth=max_submodule_depth,
            file_cap=submodule_file_cap,
            concurrency=concurrency,
        )

    async def resolve(self, raw: str) -> ResolvedReference:
        """Parse a GitHub URL or owner/repo path and disambiguate its branch."""
        return await self._resolver.resolve(parse_github_url(raw))

    async def clean_path_for(self, raw: str, *, extension: OutputFormat = 'md') -> str:
        ref = await self.resolve(raw)
        return to_clean_path(ref.owner, ref.repo, ref.branch, ref.path, ref.is_file, extension)

    async def aggregate_url(
        self,
        raw: str,
        *,
        include: ParamValues = None,
        exclude: ParamValues = None,
        submodules: bool = False,
        fmt: OutputFormat = 'md',
    ) -> AggregationResult:
        ref = await self.resolve(raw)
        return await self.aggregate(ref, include=include, exclude=exclude, submodules=submodules, fmt=fmt)

    async def aggregate_clean_path(
        self,
        slug: str,
        *,
        include: ParamValues = None,
        exclude: ParamValues = None,
        submodules: bool = False,
    ) -> AggregationResult:
        parsed = parse_clean_path(slug)
        if parsed is None:
            raise InvalidCleanPath(f'Invalid path format: {slug!r}')
        return await self.aggregate(
            parsed.to_reference(),
            include=include,
            exclude=exclude,
            submodules=submodules,
            fmt=parsed.extension,
        )

    async def aggregate(
        self,
        ref: ResolvedReference,
        *,
        include: ParamValues = None,
        exclude: ParamValues = None,
        submodules: bool = False,
        fmt: OutputFormat = 'md',
    ) -> AggregationResult:
        if ref.is_file and ref.path:
            text = await self._content.get_file(ref.owner, ref.repo, ref.branch, ref.path)
            self._log.info('✔ fetched %s', ref.label())
            return AggregationResult(text=text, reference=ref, file_count=1)

        all_files = await self._listing.list_files(ref.owner, ref.repo, ref.branch)
        files: List[FileEntry] = list(all_files)
        if ref.path:
            files = filter_by_directory(files, ref.path)
        files = apply_filters(files, exclude, include)
        files = filter_ignored(files)
        files = [f for f in files if is_text_file(f.path)]
        self._log.info('✔ %s: %d of %d file(s) selected', ref.label(), len(files), len(all_files))

        sections = await map_bounded(files, self._section_reader(ref), self._concurrency)
        failed = tuple(s.path for s in sections if s.failed)
        if failed:
            self._log.warning('⚠  %d file(s) of %s could not be fetched', len(failed), ref.label())

        sub_results: List[SubmoduleResult] = []
        if submodules and not ref.path:
            sub_results = await self._recursor.fetch(
                ref.owner, ref.repo, ref.branch, all_files, ctx=TraversalContext()
            )

        text = DocumentRenderer(fmt=fmt).render(ref, sections, sub_results)
        return AggregationResult(
            text=text,
            reference=ref,
            file_count=len(sections),
            failed_paths=failed,
            submodules=tuple(sub_results),
        )

    def _section_reader(self, ref: ResolvedReference) -> Callable[[FileEntry], Awaitable[FileSection]]:
        async def _read(entry: FileEntry) -> FileSection:
            try:
                text = await self._content.get_file(ref.owner, ref.repo, ref.branch, entry.path)
            except Exception as exc:
                self._log.warning('⚠  could not fetch %s: %s', entry.path, describe(exc))
                return FileSection(path=entry.path, content=None)
            return FileSection(path=entry.path, content=text)

        return _read
