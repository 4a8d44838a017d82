#!/usr/bin/env python3
"""
GRID INVADERS Launcher
=======================
Run this script to start the game.
"""

import sys

from grid_invaders.main import main

if __name__ == "__main__":
    sys.exit(main())
