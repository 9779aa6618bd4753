# ookdecode/cli/main.py
from __future__ import annotations

from typing import Optional

from ookdecode.core.errors import OokDecodeError

from ookdecode.cli.args import parse_args
from ookdecode.cli.commands import (
    cmd_classify,
    cmd_decode,
    cmd_file,
    cmd_listen,
    configure_logging,
)


def main(argv: Optional[list[str]] = None) -> int:
    try:
        args, cfg = parse_args(argv)
        configure_logging(cfg)

        if args.cmd == "decode":
            return cmd_decode(args.packets, cfg=cfg)
        if args.cmd == "file":
            return cmd_file(args.path, cfg=cfg)
        if args.cmd == "listen":
            return cmd_listen(cfg=cfg, secs=args.secs)
        if args.cmd == "classify":
            return cmd_classify(args.packets)

        return 2
    except OokDecodeError as e:
        print(f"ERROR: {e.message}")
        if e.hint:
            print(f"Hint: {e.hint}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
