"""Entry point for running lazy-resources as a module.

This allows the package to be executed as:
    python -m lazy_resources

It delegates to the CLI main function.
"""

from lazy_resources.cli.main import main

if __name__ == "__main__":
    main()
