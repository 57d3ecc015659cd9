#!/usr/bin/env python3
from __future__ import annotations
from typing import Any

import argparse
import json
import logging
import sys

from .vectors import LorentzVector, Vector
from .interop import from_sequence, encode
from .utils import Colour, logger, setup_logging, format_components, LorentzVectorException, TOLERANCE


def inspect(p: LorentzVector, q: LorentzVector | None = None) -> dict[str, Any]:
    res: dict[str, Any] = {
        'p': encode(p),
        'square': p.square(),
        'pt': p.pt(),
        'pseudo_rap': p.pseudo_rap(),
        'spatial_distance': p.spatial_distance(),
    }
    if q is not None:
        res['q'] = encode(q)
        res['dot'] = p.dot(q)
        res['getdelphi'] = p.getdelphi(q)
        res['delta_r'] = p.delta_r(q)
    return res


def mass_report(before: LorentzVector, after: LorentzVector) -> dict[str, Any]:
    m2_before = before.square()
    m2_after = after.square()
    scale = max(abs(m2_before), before.euclidean_square(), 1.)
    return {
        'square_before': m2_before,
        'square_after': m2_after,
        'invariant': abs(m2_after - m2_before) / scale < TOLERANCE,
    }


def boost(p: LorentzVector, beta: list[float]) -> dict[str, Any]:
    boosted = p.boost(Vector(*beta))
    res = {'p': encode(p), 'boosted': encode(boosted)}
    res.update(mass_report(p, boosted))
    return res


def boost_from_to(k: LorentzVector, p: LorentzVector, q: LorentzVector) -> dict[str, Any]:
    boosted = k.boost_from_to(p, q)
    res = {'k': encode(k), 'boosted': encode(boosted)}
    res.update(mass_report(k, boosted))
    return res


def com_to_lab(momenta: list[LorentzVector], x1: float, x2: float, ebeam1: float, ebeam2: float) -> dict[str, Any]:
    if len(momenta) < 2:
        raise LorentzVectorException(
            'At least the two incoming momenta must be specified.')
    boosted = LorentzVector.boost_from_com_to_lab_frame(
        [m.copy() for m in momenta], x1, x2, ebeam1, ebeam2)
    return {
        'momenta': [encode(m) for m in momenta],
        'boosted': [encode(m) for m in boosted],
    }


def report(command: str, res: dict[str, Any]) -> None:
    new_line = '\n'
    logger.info(f"Result of command {Colour.GREEN}{command}{Colour.END}:{new_line}"
                f"{new_line.join(f'| {Colour.BLUE}{k:<20s}{Colour.END}: {Colour.GREEN}{_render(v)}{Colour.END}' for k, v in res.items())}")


def _render(value: Any) -> str:
    match value:
        case bool(): return str(value)
        case float() | int(): return f'{value:+.16e}'
        case [list(), *_]: return '; '.join(f'[{format_components(v)}]' for v in value)
        case list(): return f'[{format_components(value)}]'
        case _: return str(value)


def build_parser() -> argparse.ArgumentParser:
    # create the top-level parser
    parser = argparse.ArgumentParser(prog='lorentzvector')

    parser.add_argument('--verbosity', '-v', type=str, choices=[
                        'debug', 'info', 'critical'], default='info', help='Set verbosity level')
    parser.add_argument('--format', '-f', type=str, choices=['text', 'json'], default='text',
                        help='Output format of the results. Default = %(default)s')

    subparsers = parser.add_subparsers(
        title="commands", dest="command", required=True, help='Various commands available')

    # create the parser for the "inspect" command
    parser_inspect = subparsers.add_parser(
        'inspect', help='Compute kinematic observables of a momentum, and of a pair with -q.')
    parser_inspect.add_argument('-p', type=float, nargs=4, required=True,
                                help='Momentum (t x y z) to inspect')
    parser_inspect.add_argument('-q', type=float, nargs=4, default=None,
                                help='Second momentum (t x y z). Default = %(default)s')

    # create the parser for the "boost" command
    parser_boost = subparsers.add_parser(
        'boost', help='Boost a momentum by a velocity vector.')
    parser_boost.add_argument('-p', type=float, nargs=4, required=True,
                              help='Momentum (t x y z) to boost')
    parser_boost.add_argument('--beta', '-b', type=float, nargs=3, required=True,
                              help='Boost velocity (bx by bz), with |beta| < 1')

    # create the parser for the "boost_from_to" command
    parser_from_to = subparsers.add_parser(
        'boost_from_to', help='Apply to k the boost sending p onto q.')
    parser_from_to.add_argument('-k', type=float, nargs=4, required=True,
                                help='Momentum (t x y z) to transform')
    parser_from_to.add_argument('-p', type=float, nargs=4, required=True,
                                help='Source momentum (t x y z) of the boost')
    parser_from_to.add_argument('-q', type=float, nargs=4, required=True,
                                help='Target momentum (t x y z) of the boost')

    # create the parser for the "com_to_lab" command
    parser_com = subparsers.add_parser(
        'com_to_lab', help='Boost momenta from the centre-of-mass frame to the lab frame.')
    parser_com.add_argument('--momentum', '-m', type=float, nargs=4, action='append', required=True,
                            help='Momentum (t x y z), repeat for each; the first two are the incoming ones')
    parser_com.add_argument('--x1', type=float, required=True,
                            help='Momentum fraction of the first beam')
    parser_com.add_argument('--x2', type=float, required=True,
                            help='Momentum fraction of the second beam')
    parser_com.add_argument('--ebeam1', type=float, default=6500.,
                            help='Energy of the first beam. Default = %(default)s GeV')
    parser_com.add_argument('--ebeam2', type=float, default=6500.,
                            help='Energy of the second beam. Default = %(default)s GeV')

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    match args.verbosity:
        case 'debug': setup_logging(logging.DEBUG)
        case 'info': setup_logging(logging.INFO)
        case 'critical': setup_logging(logging.CRITICAL)

    try:
        match args.command:
            case 'inspect':
                res = inspect(from_sequence(args.p),
                              None if args.q is None else from_sequence(args.q))
            case 'boost':
                res = boost(from_sequence(args.p), args.beta)
            case 'boost_from_to':
                res = boost_from_to(from_sequence(args.k), from_sequence(
                    args.p), from_sequence(args.q))
            case 'com_to_lab':
                res = com_to_lab([from_sequence(m) for m in args.momentum],
                                 args.x1, args.x2, args.ebeam1, args.ebeam2)
            case _:
                raise LorentzVectorException(
                    f'Command {args.command} not implemented.')
    except LorentzVectorException as e:
        logger.error(f'{Colour.RED}{e}{Colour.END}')
        return 1

    match args.format:
        case 'json': print(json.dumps(res))
        case _: report(args.command, res)
    return 0


if __name__ == '__main__':
    sys.exit(main())
