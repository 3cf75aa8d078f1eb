from __future__ import annotations

import argparse
import json
import logging
from typing import Optional

from .api import diff_to_dict
from .config import BoardConfig
from .core.setup import ascii_board, build_board
from .core.types import AddUnit
from .diff import diff
from .fen import STARTPOS_FEN, board_to_fen, parse_extended_fen


def _config(args: argparse.Namespace) -> BoardConfig:
    return BoardConfig.from_env(
        horizontal_add_unit=AddUnit.parse(args.h_unit) if args.h_unit else None,
        vertical_add_unit=AddUnit.parse(args.v_unit) if args.v_unit else None,
        horizontal_extend_limit=args.h_limit,
        vertical_extend_limit=args.v_limit,
    )


def _board(fen: str, cfg: BoardConfig):
    return build_board(
        parse_extended_fen(fen),
        cfg.horizontal_add_unit,
        cfg.vertical_add_unit,
        cfg.horizontal_extend_limit,
        cfg.vertical_extend_limit,
    )


def cmd_show(args: argparse.Namespace) -> int:
    board = _board(args.fen or STARTPOS_FEN, _config(args))
    print(ascii_board(board))
    print()
    print(board_to_fen(board.rows))
    return 0


def cmd_units(args: argparse.Namespace) -> int:
    board = _board(args.fen or STARTPOS_FEN, _config(args))
    for loc in sorted(board.location_to_unit):
        members = board.location_to_unit[loc]
        labels = [board.rows[i.row][i.col].location for i in members]
        print(f"{loc}: {' '.join(labels) if labels else '-'}")
    return 0


def cmd_diff(args: argparse.Namespace) -> int:
    cfg = _config(args)
    before = _board(args.before, cfg)
    after = _board(args.after, cfg)
    print(json.dumps(diff_to_dict(diff(before.piece_map(), after.piece_map())), indent=2, sort_keys=True))
    return 0


def _add_board_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--h-unit", type=str, default=None, help="horizontal add unit, e.g. 2x2")
    p.add_argument("--v-unit", type=str, default=None, help="vertical add unit, e.g. 2x2")
    p.add_argument("--h-limit", type=int, default=None, help="horizontal extend limit")
    p.add_argument("--v-limit", type=int, default=None, help="vertical extend limit")


def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="extensible-board")
    ap.add_argument("--log-level", type=str, default="WARNING")
    sub = ap.add_subparsers(dest="cmd", required=True)

    ss = sub.add_parser("show", help="Show the padded board and its position string")
    ss.add_argument("--fen", type=str, default=None)
    _add_board_options(ss)
    ss.set_defaults(fn=cmd_show)

    su = sub.add_parser("units", help="List the unit each non-existent square reveals")
    su.add_argument("--fen", type=str, default=None)
    _add_board_options(su)
    su.set_defaults(fn=cmd_units)

    sd = sub.add_parser("diff", help="Added/removed squares between two positions")
    sd.add_argument("before", type=str)
    sd.add_argument("after", type=str)
    _add_board_options(sd)
    sd.set_defaults(fn=cmd_diff)

    args = ap.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())
    return int(args.fn(args))


if __name__ == "__main__":
    raise SystemExit(main())
