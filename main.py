#!/usr/bin/env python3
"""Seedpick CLI entry point."""

import sys

from seedpick.cli import main

if __name__ == "__main__":
    sys.exit(main())
