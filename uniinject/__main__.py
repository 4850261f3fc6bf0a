"""
Entry point for running UniInject as a module.

Usage:
    python -m uniinject --help
    python -m uniinject inject --root ./my-app --dry-run
    python -m uniinject check
"""
from .cli import app


if __name__ == "__main__":
    app()
