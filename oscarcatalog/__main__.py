"""
Package entry point.

Allows running the application via:

    python -m oscarcatalog

This simply forwards execution to oscarcatalog.cli.main().
"""

from oscarcatalog.cli import main

if __name__ == "__main__":
    main()
