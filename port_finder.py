#!/usr/bin/env python3
"""
port-finder - Find available network ports

Probes TCP ports by binding them, with exclusion lists, named validators
and consecutive-block search.

Usage:
    python port_finder.py --start 8000 --count 3 --consecutive
    python port_finder.py --check 3000 --json
"""
import sys

from portfinder.main import main

if __name__ == "__main__":
    sys.exit(main())
