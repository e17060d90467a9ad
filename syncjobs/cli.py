#!/usr/bin/env python3
"""
syncjobs - Declarative tar/scp and rsync backup jobs over SSH
=================================================================

Reads a YAML config describing servers, compress-and-copy jobs and
rsync mirror jobs, then runs every job in order.

Usage:
  syncjobs [-c PATH]

A config load failure exits 1. Individual job failures are reported but
the run always exits 0.
"""
import sys
import argparse


def main(argv=None):
    """CLI entry point for syncjobs"""
    from syncjobs import config as _cfg
    from syncjobs.core.engine import run_jobs

    parser = argparse.ArgumentParser(
        prog="syncjobs",
        description="Declarative tar/scp and rsync backup jobs over SSH",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-c", "--config", "-config", dest="config", metavar="PATH",
                        help=f"path to config file (default: {_cfg.DEFAULT_CONFIG_PATH})")
    args = parser.parse_args(argv)

    try:
        path = _cfg.find_config(args.config)
        cfg = _cfg.load_config(path)
    except _cfg.ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)

    run_jobs(cfg)
    return 0


if __name__ == "__main__":
    sys.exit(main())
