"""CLI entry point: spk-tools objects|segments|coverage|tree|ephemeris|state|table subcommands."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import NoReturn, TextIO, cast

from spk_tools.config import resolve_kernel
from spk_tools.ephemeris import TableParams, generate_state_table
from spk_tools.spk.jpl import JplEphemeris
from spk_tools.spk.bodies import BodyNode, build_body_tree, root_body_id
from spk_tools.spk.context import KernelContext
from spk_tools.spk.index import KernelIndex, spk_coverage, spk_objects, spk_segments
from spk_tools.spk.names import (
    body_code_to_name,
    body_code_to_string,
    frame_id_to_name,
    resolve_body,
)
from spk_tools.time_utils import et_from_utc, utc_from_et

logger = logging.getLogger(__name__)

# Errors reported as "Error: ..." with exit code 1.
_USER_ERRORS = (ValueError, RuntimeError, LookupError, OSError)


def _configure_logging(verbose: bool = False) -> None:
    """Configure logging for CLI (stderr, level from --verbose or SPK_TOOLS_LOG)."""
    level = logging.DEBUG if verbose else logging.WARNING
    env_level = os.environ.get('SPK_TOOLS_LOG', '').upper()
    if env_level in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
        level = getattr(logging, env_level)
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(name)s: %(message)s',
        stream=sys.stderr,
    )


def _objects_cmd(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    """List the bodies of an SPK file (objects subcommand)."""
    for body in spk_objects(resolve_kernel(args.file)):
        name = body_code_to_name(body)
        print(f'{body:>10d}  {name}'.rstrip())
    return 0


def _segments_cmd(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    """List every segment of an SPK file (segments subcommand)."""
    for info in spk_segments(resolve_kernel(args.file)):
        s = info.summary
        print(
            f'{s.target:>10d} {s.center:>10d} {frame_id_to_name(s.frame) or s.frame:<12} '
            f'type {s.data_type:<3d} {s.start_et:18.3f} {s.end_et:18.3f}  {info.name}'.rstrip()
        )
    return 0


def _coverage_cmd(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    """Print the coverage windows of one body (coverage subcommand)."""
    body = resolve_body(args.body)
    windows = spk_coverage(resolve_kernel(args.file), body)
    if not windows:
        print(f'Error: {body_code_to_string(body)} has no segments in {args.file}', file=sys.stderr)
        return 1
    for start, end in windows:
        if args.et:
            print(f'{start:18.3f} {end:18.3f}')
        else:
            print(f'{utc_from_et(start)}  {utc_from_et(end)}')
    return 0


def _print_tree(node: BodyNode, stream: TextIO, depth: int = 0) -> None:
    frame = f' [{node.frame_name}]' if node.frame_name else ''
    stream.write(f'{"  " * depth}{node.body_id} {node.name}{frame}\n')
    for child in node.children:
        _print_tree(child, stream, depth + 1)


def _tree_cmd(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    """Print the center-of-motion tree of an SPK file (tree subcommand)."""
    tree = build_body_tree(resolve_kernel(args.file))
    if not tree:
        print(f'Error: {args.file} has no segments', file=sys.stderr)
        return 1
    _print_tree(tree[root_body_id(tree)], sys.stdout)
    # Bodies whose centers are not in this file
    for node in tree.values():
        if node.parent is None and node.body_id != root_body_id(tree):
            _print_tree(node, sys.stdout)
    return 0


def _ephemeris_cmd(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    """Describe a JPL DE or INPOP binary ephemeris (ephemeris subcommand)."""
    with JplEphemeris(resolve_kernel(args.file)) as ephemeris:
        kind = 'INPOP' if ephemeris.is_inpop else f'DE{ephemeris.de_number}'
        print(f'Ephemeris {kind} ({ephemeris.time_scale}, {ephemeris.components} components)')
        for title in ephemeris.titles:
            if title:
                print(f'  {title}')
        print(f'Start     {utc_from_et(ephemeris.start_et)}')
        print(f'End       {utc_from_et(ephemeris.end_et)}')
        print(f'Records   {ephemeris.nrecords} x {ephemeris.step_days:g} days')
        print(f'AU        {ephemeris.au_km:.3f} km')
        print(f'EMRAT     {ephemeris.emrat:.10f}')
        for body in ephemeris.bodies():
            gm = ephemeris.gm(body)
            gm_text = '' if gm is None else f'  GM {gm:.9e}'
            print(f'{body:>10d}  {body_code_to_name(body):<24}{gm_text}'.rstrip())
    return 0


def _load_kernels(context: KernelContext, kernels: list[str]) -> None:
    for kernel in kernels:
        context.load(resolve_kernel(kernel))


def _state_cmd(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    """Print one state vector (state subcommand)."""
    if args.et is not None:
        et = args.et
    else:
        et = et_from_utc(args.time)
    with KernelContext() as context:
        _load_kernels(context, args.kernel)
        index = KernelIndex(context)
        state, lt = index.get_state_relative_to_body(
            args.target, et, args.frame, args.observer, args.aberration
        )
    print(f'ET        {et:.6f}')
    print(f'Frame     {frame_id_to_name(state.frame_id)}')
    print('Position  ' + ' '.join(f'{v:.6f}' for v in state.position))
    print('Velocity  ' + ' '.join(f'{v:.9f}' for v in state.velocity))
    print(f'Range     {state.range:.6f}')
    print(f'LT        {lt:.9f}')
    return 0


def _table_cmd(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    """Write a state table (table subcommand)."""
    params = TableParams(
        target=args.target,
        observer=args.observer,
        start_time=args.start,
        stop_time=args.stop,
        frame=args.frame,
        interval=args.interval,
        time_unit=args.time_unit,
        aberration=args.aberration,
    )
    with KernelContext() as context:
        _load_kernels(context, args.kernel)
        if args.output is not None:
            with open(args.output, 'w') as f:
                generate_state_table(context, params, f)
        else:
            generate_state_table(context, params, sys.stdout)
    return 0


def _add_query_arguments(sub: argparse.ArgumentParser) -> None:
    sub.add_argument(
        '-k',
        '--kernel',
        type=str,
        action='append',
        required=True,
        help='SPK kernel or JPL DE/INPOP binary ephemeris to load (repeatable; later files '
        'take priority, SPK segments before DE/INPOP data); '
        'relative names are also looked up in SPK_KERNEL_PATH',
    )
    sub.add_argument('--target', type=str, required=True, help='Target body name or NAIF ID')
    sub.add_argument('--observer', type=str, required=True, help='Observer body name or NAIF ID')
    sub.add_argument('--frame', type=str, default='J2000', help='Output frame (default J2000)')
    sub.add_argument(
        '--aberration',
        type=str.upper,
        default='LT',
        choices=['LT', 'NONE'],
        help='LT for light-time corrected target position, NONE for geometric',
    )


def main(argv: list[str] | None = None) -> int:
    """Entry point for spk-tools CLI.

    Returns:
        Exit code 0 on success, 1 on failure.
    """
    parser = argparse.ArgumentParser(
        prog='spk-tools',
        description='Inspect NAIF SPK ephemeris kernels and compute body states.',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Show DEBUG logs')
    subparsers = parser.add_subparsers(dest='command', required=True)

    objects_parser = subparsers.add_parser('objects', help='List the bodies of an SPK file')
    objects_parser.add_argument('file', type=str, help='SPK file')
    objects_parser.set_defaults(func=_objects_cmd)

    segments_parser = subparsers.add_parser('segments', help='List the segments of an SPK file')
    segments_parser.add_argument('file', type=str, help='SPK file')
    segments_parser.set_defaults(func=_segments_cmd)

    coverage_parser = subparsers.add_parser('coverage', help='Time coverage of one body')
    coverage_parser.add_argument('file', type=str, help='SPK file')
    coverage_parser.add_argument('body', type=str, help='Body name or NAIF ID')
    coverage_parser.add_argument(
        '--et', action='store_true', help='Print ET seconds instead of UTC'
    )
    coverage_parser.set_defaults(func=_coverage_cmd)

    tree_parser = subparsers.add_parser('tree', help='Center-of-motion tree of an SPK file')
    tree_parser.add_argument('file', type=str, help='SPK file')
    tree_parser.set_defaults(func=_tree_cmd)

    ephemeris_parser = subparsers.add_parser(
        'ephemeris', help='Describe a JPL DE or INPOP binary ephemeris'
    )
    ephemeris_parser.add_argument('file', type=str, help='DE/INPOP binary file')
    ephemeris_parser.set_defaults(func=_ephemeris_cmd)

    state_parser = subparsers.add_parser('state', help='State of a target relative to an observer')
    _add_query_arguments(state_parser)
    when = state_parser.add_mutually_exclusive_group(required=True)
    when.add_argument('--time', type=str, help='UTC time')
    when.add_argument('--et', type=float, help='Ephemeris time (TDB seconds past J2000)')
    state_parser.set_defaults(func=_state_cmd)

    table_parser = subparsers.add_parser('table', help='State table over a time range')
    _add_query_arguments(table_parser)
    table_parser.add_argument('--start', type=str, required=True, help='Start time (UTC)')
    table_parser.add_argument('--stop', type=str, required=True, help='Stop time (UTC)')
    table_parser.add_argument('--interval', type=float, default=1.0, help='Time step')
    table_parser.add_argument(
        '--time-unit',
        type=str,
        default='hour',
        choices=['sec', 'min', 'hour', 'day'],
    )
    table_parser.add_argument('-o', '--output', type=str, default=None, help='Output file')
    table_parser.set_defaults(func=_table_cmd)

    args = parser.parse_args(argv)
    _configure_logging(verbose=args.verbose)
    try:
        return cast(int, args.func(parser, args))
    except _USER_ERRORS as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1


def cli_main() -> NoReturn:
    """Entry point for console_scripts; calls main() and exits with its return code."""
    sys.exit(main())


if __name__ == '__main__':
    sys.exit(main())
