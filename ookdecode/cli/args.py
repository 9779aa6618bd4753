# ookdecode/cli/args.py
from __future__ import annotations

import argparse
from dataclasses import replace
from typing import Optional, Tuple

from ookdecode.app.config import LOG_LEVELS, ConfigLoader, DecoderConfig, validate_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ookdecode")
    parser.add_argument("--config", default=None, help="YAML config file.")
    parser.add_argument("--log-level", default=None, type=str.upper, choices=LOG_LEVELS)
    parser.add_argument("--log-file", default=None, help="Append application log to this file.")

    sub = parser.add_subparsers(dest="cmd", required=True)

    output = argparse.ArgumentParser(add_help=False)
    output.add_argument("--json", action="store_true", help="Print one JSON object per packet.")
    output.add_argument(
        "--show-unsupported",
        action="store_true",
        help="Report packets no decoder recognises instead of dropping them.",
    )
    output.add_argument("--no-raw", action="store_true", help="Omit the raw byte echo.")

    p_decode = sub.add_parser("decode", parents=[output], help="Decode hex packets given as arguments.")
    p_decode.add_argument("packets", nargs="+", metavar="HEX")

    p_file = sub.add_parser("file", parents=[output], help="Decode one hex packet per line from a file.")
    p_file.add_argument("path", help="Input file, or '-' for stdin.")

    p_listen = sub.add_parser("listen", parents=[output], help="Decode packets read from a receiver port.")
    p_listen.add_argument("--port", default=None)
    p_listen.add_argument("--baudrate", type=int, default=None)
    p_listen.add_argument("--secs", type=float, default=None, help="Stop after this many seconds.")

    p_classify = sub.add_parser("classify", help="Show which layout each packet matches.")
    p_classify.add_argument("packets", nargs="+", metavar="HEX")

    return parser


def resolve_config(args: argparse.Namespace) -> DecoderConfig:
    """File config (if any) with CLI flags layered on top."""
    cfg = ConfigLoader(args.config).load() if args.config else DecoderConfig()

    overrides = {}
    if args.log_level:
        overrides["log_level"] = args.log_level
    if args.log_file:
        overrides["log_file"] = args.log_file
    if getattr(args, "json", False):
        overrides["output_format"] = "json"
    if getattr(args, "show_unsupported", False):
        overrides["drop_unsupported"] = False
    if getattr(args, "no_raw", False):
        overrides["include_raw"] = False
    if getattr(args, "port", None):
        overrides["port"] = args.port
    if getattr(args, "baudrate", None):
        overrides["baudrate"] = args.baudrate

    cfg = replace(cfg, **overrides)
    validate_config(cfg)
    return cfg


def parse_args(argv: Optional[list[str]] = None) -> Tuple[argparse.Namespace, DecoderConfig]:
    args = build_parser().parse_args(argv)
    return args, resolve_config(args)
