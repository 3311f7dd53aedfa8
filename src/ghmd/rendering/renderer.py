"""
Document assembly for ghmd.

Two flavours share the same structure (header line, one section per file,
one section per submodule):

• md  – markdown headings with fenced file bodies.
• txt – HEADER_DELIM banners with raw file bodies.

A file whose content could not be fetched keeps its section; the body is the
failure placeholder.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from ghmd.constants import FAILED_PLACEHOLDER, HEADER_DELIM
from ghmd.core.models import OutputFormat, ResolvedReference, SubmoduleResult


@dataclass(frozen=True)
class FileSection:
    path: str
    content: Optional[str]

    @property
    def failed(self) -> bool:
        return self.content is None


class DocumentRenderer:
    """Render aggregated content as a single text document."""

    def __init__(
        self,
        *,
        fmt: OutputFormat = 'md',
        header_delim: str = HEADER_DELIM,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if fmt not in ('md', 'txt'):
            raise ValueError(f'unsupported output format: {fmt!r}')
        self._fmt = fmt
        self._hdr = header_delim
        self._log = logger or logging.getLogger('ghmd.render')

    @property
    def fmt(self) -> OutputFormat:
        return self._fmt

    def _banner(self, title: str) -> str:
        return f'{self._hdr}{title} {self._hdr.strip()}'

    def header(self, ref: ResolvedReference) -> str:
        return f'# {ref.label()}' if self._fmt == 'md' else ref.label()

    def file_section(self, section: FileSection, *, level: int = 2) -> str:
        body = FAILED_PLACEHOLDER if section.content is None else section.content
        if self._fmt == 'txt':
            return f'{self._banner(section.path)}\n{body}'
        heading = '#' * level
        if section.failed:
            return f'{heading} {section.path}\n\n{body}'
        return f'{heading} {section.path}\n\n```\n{body}\n```'

    def submodule_section(self, result: SubmoduleResult) -> str:
        sm = result.submodule
        title = f'Submodule: {sm.name} ({sm.owner}/{sm.repo}) at {sm.path}'
        if self._fmt == 'txt':
            parts: List[str] = [self._banner(title)]
        else:
            parts = [f'## {title}']

        if result.error:
            parts.append(f'*Error: {result.error}*')
        elif not result.files:
            parts.append('*No files*')
        else:
            for f in result.files:
                parts.append(self.file_section(FileSection(path=f.path, content=f.content), level=3))
        return '\n\n'.join(parts)

    def render(
        self,
        ref: ResolvedReference,
        files: Iterable[FileSection],
        submodules: Iterable[SubmoduleResult] = (),
    ) -> str:
        sections = [self.file_section(f) for f in files]
        sections.extend(self.submodule_section(r) for r in submodules)
        self._log.debug('rendered %d section(s) for %s', len(sections), ref.label())
        return f'{self.header(ref)}\n\n' + '\n\n'.join(sections)
