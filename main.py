#!/usr/bin/env python3
"""
Acacia Bloom - Entry point.

Run this to forecast from a JSON inputs file without installing the package:
    python main.py inputs.json --days 14
"""
import sys
import multiprocessing
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from acacia_bloom.cli import main

if __name__ == "__main__":
    # Required for ProcessPoolExecutor under the Windows 'spawn' start method.
    multiprocessing.freeze_support()
    sys.exit(main())
