#!/usr/bin/env python3
"""
Layout carousel entry point for running as a module: python3 -m layout_carousel
"""

import sys
from layout_carousel.cli import main

if __name__ == '__main__':
    sys.exit(main())
