#!/usr/bin/env python3
"""
Main script for running the curve-fitting pipeline.
"""

# Pipeline overview (README-style):
# 1) Load a CSV of points (plain x/y columns or "<Name>: x"/"<Name>: y" pairs).
# 2) Build one dataset per column pair with the requested fit family.
# 3) Fit each dataset; "auto" picks the family with the highest R^2.
# 4) Sample each fitted curve across the data range for plotting.
# 5) Export the results table, overview and per-dataset figures, and a
#    standalone interactive HTML page.

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from curvefitter.cli import main

if __name__ == "__main__":
    sys.exit(main())
