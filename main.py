"""docextract -- application entry point.

Usage:
    python main.py path/to/document.pdf [--output DIR]
"""

import sys

from docextract.cli import main

if __name__ == "__main__":
    sys.exit(main())
