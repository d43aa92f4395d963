"""
Main entry point script for PyJoyEvents.

This script serves as the executable entry point when running
PyJoyEvents from a source checkout.
"""

import sys
from pyjoyevents.main import main

if __name__ == "__main__":
    sys.exit(main())
