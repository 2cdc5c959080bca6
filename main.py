"""Bloch Circuit Simulator - command-line entry point."""

import sys

from bloch_sim.cli import main

if __name__ == '__main__':
    sys.exit(main())
