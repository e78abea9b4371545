"""
Mensa Plan Entry Point.

Usage:
    python -m mensa_plan show rempart --key ABC
    python -m mensa_plan show 610 --day tue
    python -m mensa_plan all
    python -m mensa_plan locations
    python -m mensa_plan config --show
"""
import sys


def main() -> int:
    """Main entry point for the Mensa CLI."""
    from mensa_plan.infrastructure.cli.mensa_cli import main as cli_main
    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
