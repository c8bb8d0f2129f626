"""
Entry point for the Purview data security and governance helpers.
Acquires a token, then runs one protection-scope, label or content-processing command.
"""
import sys

from purview_wrapper.cli import main

if __name__ == "__main__":
    sys.exit(main())
