#!/usr/bin/env python3
"""
modeless entry point for running as a module: python3 -m modeless
"""

import sys
from modeless.cli import main

if __name__ == '__main__':
    sys.exit(main())
