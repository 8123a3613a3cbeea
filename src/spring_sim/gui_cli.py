"""
GUI command-line interface entry point.

Usage:
    spring-sim-gui [--title TITLE]
"""

import argparse
import sys


def main(argv=None):
    parser = argparse.ArgumentParser(description="Mass-Spring Simulator GUI")
    parser.add_argument(
        "--title",
        type=str,
        default="Mass-Spring Simulator",
        help="Window title"
    )
    args = parser.parse_args(argv)

    # Import here to avoid DearPyGui import if just checking help
    from .gui.app import run_gui

    try:
        run_gui(args.title)
    except KeyboardInterrupt:
        print("\nGUI closed.")
        sys.exit(0)


if __name__ == "__main__":
    main()
