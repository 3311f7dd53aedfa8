from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import NoReturn, Optional, Sequence, TextIO

from ghmd.aggregator import Aggregator
from ghmd.core.errors import GhmdError, InvalidCleanPath, InvalidInput
from ghmd.logging.factory import DefaultLoggerFactory
from ghmd.logging.helpers import get_logger
from ghmd.reference.clean_path import parse_clean_path, to_clean_path
from ghmd.reference.parser import looks_like_clean_path
from ghmd.runtime.config import GhmdConfig
from ghmd.runtime.wiring import build_aggregator

logger = get_logger('ghmd')


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog='ghmd',
        description='Render a GitHub repository, directory or file as a single text document.',
    )
    p.add_argument(
        'reference',
        help='GitHub URL, owner/repo[/path] shorthand or clean-path slug (gh_…/ghf_….md|txt)',
    )
    p.add_argument('-i', '--include', action='append', default=[], metavar='PATTERN',
                   help='keep only matching paths; repeatable, accepts {a,b,c}')
    p.add_argument('-e', '--exclude', action='append', default=[], metavar='PATTERN',
                   help='drop matching paths; repeatable, accepts {a,b,c}')
    p.add_argument('--submodules', action='store_true', help='append the content of git submodules')
    p.add_argument('--format', choices=('md', 'txt'), default='md', dest='fmt',
                   help='output flavour for URL references (slugs carry their own)')
    p.add_argument('--slug', action='store_true', help='print the resolved clean-path slug and exit')
    p.add_argument('-o', '--output', type=Path, default=None, help='write the document to FILE')
    p.add_argument('--concurrency', type=int, default=None, help='parallel content fetches')
    p.add_argument('--max-depth', type=int, default=None, dest='max_depth', help='submodule recursion depth')
    p.add_argument('--json-logs', action='store_true', help='emit JSON log lines')
    p.add_argument('-v', '--verbose', action='store_true', help='debug logging')
    return p


def _configure_logging(enable_json: bool, verbose: bool = False) -> None:
    """Configure process-wide logging once, either JSON or plain text."""
    global logger
    level = logging.DEBUG if verbose else logging.INFO
    factory = DefaultLoggerFactory(json_logs=enable_json, level=level)
    logger = factory.get_logger('ghmd')


async def _execute(agg: Aggregator, ns: argparse.Namespace) -> str:
    ref = ns.reference.strip()
    if looks_like_clean_path(ref):
        if ns.slug:
            parsed = parse_clean_path(ref)
            if parsed is None:
                raise InvalidCleanPath(f'Invalid path format: {ref!r}')
            return to_clean_path(parsed.owner, parsed.repo, parsed.branch, parsed.path, parsed.is_file, parsed.extension)
        result = await agg.aggregate_clean_path(ref, include=ns.include, exclude=ns.exclude, submodules=ns.submodules)
    else:
        if ns.slug:
            return await agg.clean_path_for(ref, extension=ns.fmt)
        result = await agg.aggregate_url(
            ref, include=ns.include, exclude=ns.exclude, submodules=ns.submodules, fmt=ns.fmt
        )

    for path in result.failed_paths:
        logger.warning('⚠  placeholder emitted for %s', path)
    for sub in result.submodules:
        if sub.error:
            logger.warning('⚠  submodule %s: %s', sub.submodule.path, sub.error)
    return result.text


class Ghmd:
    """Top-level façade for command-style execution."""

    @staticmethod
    def run(
        argv: Sequence[str],
        *,
        aggregator: Optional[Aggregator] = None,
        stdout: Optional[TextIO] = None,
    ) -> str:
        """Run the tool with an argv-like sequence and return the document."""
        ns = _build_parser().parse_args(list(argv))
        _configure_logging(ns.json_logs or os.getenv('GHMD_JSON_LOGS') == '1', ns.verbose)

        cfg = GhmdConfig.from_env().with_overrides(concurrency=ns.concurrency, max_submodule_depth=ns.max_depth)
        if cfg.concurrency < 1:
            raise InvalidInput('--concurrency must be at least 1')
        agg = aggregator or build_aggregator(cfg)

        text = asyncio.run(_execute(agg, ns))

        if ns.output is not None:
            ns.output.parent.mkdir(parents=True, exist_ok=True)
            ns.output.write_text(text, encoding='utf-8')
            logger.info('✔ written %s', ns.output)
        elif stdout is not None:
            stdout.write(text if text.endswith('\n') else f'{text}\n')
        return text


def main() -> NoReturn:
    """Entry point for `python -m ghmd` and the `ghmd` console script."""
    try:
        Ghmd.run(sys.argv[1:], stdout=sys.stdout)
        raise SystemExit(0)
    except KeyboardInterrupt:
        logger.error('Interrupted by user.')
        raise SystemExit(130)
    except BrokenPipeError:
        raise SystemExit(0)
    except InvalidInput as exc:
        logger.error('%s', exc)
        raise SystemExit(2)
    except GhmdError as exc:
        logger.error('%s', exc)
        raise SystemExit(1)
    except Exception as exc:
        if os.getenv('DEBUG') == '1':
            raise
        logger.error('Unexpected error: %s', exc)
        raise SystemExit(1)


if __name__ == '__main__':
    main()
