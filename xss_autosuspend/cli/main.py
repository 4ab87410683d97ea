from __future__ import annotations

import argparse


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="xss-autosuspend")
    sub = parser.add_subparsers(dest="command", required=True)

    run_p = sub.add_parser("run", help="Watch xscreensaver and suspend when locked (foreground)")
    run_p.set_defaults(_handler="run")

    check_p = sub.add_parser("check", help="Show parsed settings and inhibitor state")
    check_p.set_defaults(_handler="check")

    init_p = sub.add_parser("init", help="Install + enable systemd user service")
    init_p.add_argument("--force", action="store_true", help="Overwrite existing unit")
    init_p.set_defaults(_handler="init")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args._handler == "run":
        from xss_autosuspend.cli.run import main as run_main

        return int(run_main())

    if args._handler == "check":
        from xss_autosuspend.cli.check import main as check_main

        return int(check_main())

    if args._handler == "init":
        from xss_autosuspend.cli.init import main as init_main

        return int(init_main(force=bool(getattr(args, "force", False))))

    raise RuntimeError(f"Unknown command: {args._handler}")


if __name__ == "__main__":
    raise SystemExit(main())
