#!/usr/bin/env python3
"""
GOPHER DASH Launcher
=====================
Run this script to start the game.
"""

from gopher_dash.main import main

if __name__ == "__main__":
    main()
