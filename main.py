"""Main entry point for gitee-gist-bridge CLI tool.

This module provides the main entry point for the command-line interface
of the gist file bridge.
"""

from gist_bridge.cli import main

if __name__ == "__main__":
    main()
