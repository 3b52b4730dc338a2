#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Entry point for direct module execution.
"""

import sys
from .utils.cli import main_cli

if __name__ == "__main__":
    sys.exit(main_cli())
