#!/usr/bin/env python3
"""
Run script for the Asset Tracking System

Loads .env, then starts the interactive report (or a one-shot report when
--office, --type or --currency is given). See --help for all flags.
"""

from asset_tracking.presentation.cli import run

if __name__ == '__main__':
    run()
