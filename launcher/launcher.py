#!/usr/bin/env python3
"""
Local Paper server launcher.

Thin script entry point for running from a checkout without installing;
see ``mc_launcher.cli`` for the commands.
"""

import sys

from mc_launcher.cli import main

if __name__ == "__main__":
    sys.exit(main())
