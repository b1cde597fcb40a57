"""Main entry point for running sedcluster as a module."""

from .cli import main

if __name__ == "__main__":
    main()
