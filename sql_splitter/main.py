"""
Entry point for the SQL Splitter CLI application.

This file serves as a clean entry point to the CLI functionality.
"""
from sql_splitter.cli.commands import main

if __name__ == "__main__":
    main()
