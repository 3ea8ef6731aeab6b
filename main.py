#!/usr/bin/env python3
"""Run ``chd`` from a checkout without installing it."""

from __future__ import annotations

import sys

from chd import cli


def main(argv: list[str] | None = None) -> int:
    return cli.main(sys.argv[1:] if argv is None else argv)


if __name__ == "__main__":  # pragma: no cover - thin CLI shim
    raise SystemExit(main())
