from __future__ import annotations

"""Project-wide constants used across modules.

This module isolates public constants (remote endpoints, defaults and the
filename allowlists used for text detection) to reduce cross-module coupling.
"""

# Banner delimiter used by the plain-text rendering flavour.
HEADER_DELIM: str = '===== '

UNGH_BASE: str = 'https://ungh.cc'
GITHUB_API_BASE: str = 'https://api.github.com'
RAW_GITHUB_BASE: str = 'https://raw.githubusercontent.com'

DEFAULT_BRANCH: str = 'main'
DEFAULT_CONCURRENCY: int = 10
DEFAULT_MAX_SUBMODULE_DEPTH: int = 2
DEFAULT_SUBMODULE_FILE_CAP: int = 100
DEFAULT_RETRIES: int = 3
DEFAULT_BACKOFF_BASE: float = 0.1
DEFAULT_TIMEOUT: float = 30.0

FAILED_PLACEHOLDER: str = '*Failed to fetch*'
CIRCULAR_REFERENCE: str = 'Circular reference detected'

# Filenames that denote a file even though they carry no extension.
KNOWN_EXTENSIONLESS_FILES: frozenset[str] = frozenset({
    'justfile', 'dockerfile', 'makefile', 'rakefile', 'gemfile',
    'procfile', 'license', 'readme', 'changelog',
})

# Paths dropped from every aggregation. Entries with '/' are path prefixes,
# the rest are matched against individual path segments.
IGNORE_FILES: tuple[str, ...] = (
    '.git',
    'node_modules',
    'bower_components',
    'vendor',
    'dist',
    'build',
    'out',
    'coverage',
    '.next',
    '.nuxt',
    '.turbo',
    '.cache',
    '.venv',
    'venv',
    '__pycache__',
    '.pytest_cache',
    '.mypy_cache',
    '.idea',
    '.vscode',
    '.DS_Store',
    'package-lock.json',
    'yarn.lock',
    'pnpm-lock.yaml',
    'bun.lockb',
    'bun.lock',
    'Cargo.lock',
    'poetry.lock',
    'uv.lock',
    'composer.lock',
    'Gemfile.lock',
    'go.sum',
    '.github/workflows/',
)

TEXT_EXTENSIONS: tuple[str, ...] = (
    # docs
    '.md', '.mdx', '.markdown', '.txt', '.rst', '.adoc', '.org', '.tex',
    # javascript / typescript
    '.js', '.ts', '.jsx', '.tsx', '.mjs', '.cjs', '.mts', '.cts',
    # python
    '.py', '.pyi', '.pyx',
    # ruby
    '.rb', '.rake', '.gemspec',
    # go / rust
    '.go', '.mod', '.sum', '.rs',
    # jvm
    '.java', '.kt', '.kts', '.scala', '.groovy', '.gradle', '.clj', '.cljs',
    # c family
    '.c', '.cpp', '.cc', '.cxx', '.h', '.hpp', '.hxx', '.cs', '.fs', '.fsx',
    # web
    '.html', '.htm', '.css', '.scss', '.sass', '.less', '.styl',
    # data / config
    '.json', '.jsonc', '.json5', '.yaml', '.yml', '.toml', '.xml', '.ini',
    '.cfg', '.conf', '.env', '.properties',
    # shell
    '.sh', '.bash', '.zsh', '.fish', '.ps1', '.psm1', '.bat', '.cmd',
    # query languages
    '.sql', '.prisma', '.graphql', '.gql',
    # frontend frameworks
    '.vue', '.svelte', '.astro',
    # mobile
    '.swift', '.m', '.mm', '.dart',
    # other languages
    '.lua', '.php', '.pl', '.pm', '.r', '.jl', '.ex', '.exs', '.erl',
    '.hrl', '.hs', '.elm', '.ml', '.mli', '.nim', '.zig', '.v', '.sol',
    '.vy', '.move', '.cairo',
    # devops
    '.dockerfile', '.makefile', '.tf', '.tfvars', '.hcl', '.nix',
    # misc
    '.gitignore', '.editorconfig', '.csv', '.tsv', '.diff', '.patch',
    '.proto', '.thrift', '.wat',
)

KNOWN_TEXT_FILES: frozenset[str] = frozenset({
    'dockerfile', 'makefile', 'rakefile', 'gemfile', 'procfile', 'justfile',
    'vagrantfile', 'brewfile', 'podfile', 'cartfile', 'fastfile', 'appfile',
    'license', 'licence', 'readme', 'changelog', 'changes', 'history',
    'contributing', 'contributors', 'authors', 'maintainers', 'codeowners',
    'security', 'code_of_conduct',
    '.gitignore', '.gitattributes', '.gitmodules', '.editorconfig',
    '.prettierrc', '.prettierignore', '.eslintrc', '.eslintignore',
    '.babelrc', '.npmrc', '.nvmrc', '.node-version', '.python-version',
    '.ruby-version', '.tool-versions', '.env.example', '.env.local',
    '.env.development', '.env.production', '.dockerignore', '.stylelintrc',
    '.markdownlint',
})
