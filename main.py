#!/usr/bin/env python3
"""
IsoRoute - Main Entry Point
Grid route finding and route tracing for isometric tile games
"""

import sys

from isoroute.presentation.cli import main


if __name__ == '__main__':
    sys.exit(main())
