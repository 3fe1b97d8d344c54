#!/usr/bin/env python3
"""
Main entry point for the schema introspector
"""

from schema_introspector.cli.main_cli import main

if __name__ == "__main__":
    main()
