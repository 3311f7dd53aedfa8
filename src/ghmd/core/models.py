from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Mapping, Optional, Tuple

ReferenceKind = Literal['repo', 'directory', 'file']
OutputFormat = Literal['md', 'txt']


@dataclass(frozen=True)
class FileEntry:
    """One blob of a repository listing, as returned by the listing service."""
    path: str
    mode: str = '100644'
    sha: str = ''
    size: int = 0


@dataclass(frozen=True)
class Reference:
    """A parsed, possibly ambiguous pointer into a GitHub repository."""
    owner: str
    repo: str
    kind: ReferenceKind
    branch: Optional[str] = None
    path: Optional[str] = None

    @property
    def key(self) -> str:
        return f'{self.owner}/{self.repo}'


@dataclass(frozen=True)
class ResolvedReference:
    """A Reference whose branch is known and whose path is a pure sub-path."""
    owner: str
    repo: str
    branch: str
    kind: ReferenceKind
    path: Optional[str] = None

    @property
    def key(self) -> str:
        return f'{self.owner}/{self.repo}'

    @property
    def is_file(self) -> bool:
        return self.kind == 'file'

    def label(self) -> str:
        suffix = f'/{self.path}' if self.path else ''
        return f'{self.owner}/{self.repo}@{self.branch}{suffix}'


@dataclass(frozen=True)
class CleanPath:
    """Decoded form of a clean-path slug."""
    owner: str
    repo: str
    branch: str
    path: Optional[str] = None
    is_file: bool = False
    extension: OutputFormat = 'md'

    def to_reference(self) -> ResolvedReference:
        kind: ReferenceKind = 'file' if self.is_file else ('directory' if self.path else 'repo')
        return ResolvedReference(
            owner=self.owner, repo=self.repo, branch=self.branch, kind=kind, path=self.path
        )


@dataclass(frozen=True)
class Submodule:
    name: str
    path: str
    url: str
    owner: str
    repo: str

    @property
    def key(self) -> str:
        return f'{self.owner}/{self.repo}'


@dataclass(frozen=True)
class SubmoduleFile:
    path: str
    content: str


@dataclass(frozen=True)
class SubmoduleResult:
    submodule: Submodule
    files: Tuple[SubmoduleFile, ...] = ()
    error: Optional[str] = None

    def with_prefix(self, prefix: str) -> 'SubmoduleResult':
        """Return a copy whose file paths are re-rooted under *prefix*."""
        files = tuple(SubmoduleFile(path=f'{prefix}/{f.path}', content=f.content) for f in self.files)
        return SubmoduleResult(submodule=self.submodule, files=files, error=self.error)


@dataclass(frozen=True)
class FetchRequest:
    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes | None = None
    timeout: float | None = None


@dataclass(frozen=True)
class FetchResponse:
    status: int
    headers: Mapping[str, str]
    body: bytes
    final_url: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300
