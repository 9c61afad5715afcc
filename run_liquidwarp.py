#!/usr/bin/env python3
"""
Liquid Warp — quick launcher.

Usage:
    python run_liquidwarp.py [options]

Run ``python run_liquidwarp.py --help`` for full options.
"""

from liquidwarp.app import main

if __name__ == "__main__":
    main()
