"""harvest-blame: Email a colour-coded summary of logged Harvest hours."""

__version__ = "0.1.0"

import pathlib

PACKAGE_DIR = pathlib.Path(__file__).parent
