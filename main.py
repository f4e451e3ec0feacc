#!/usr/bin/env python3
"""
Bill Search Tool
Main entry point for the application

Usage:
    python main.py --help                                # Show help
    python main.py search bills.csv -c Judiciary         # Search and save matches
    python main.py search bills.csv -k "Drugs, Physician" -o results/
    python main.py stats bills.csv                       # Committee statistics
    python main.py list-records bills.csv                # Show loaded bills
    python main.py serve                                 # Start web search form
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from cli.main import main

if __name__ == '__main__':
    main()
