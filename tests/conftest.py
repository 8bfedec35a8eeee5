"""Pytest configuration for the tsmigrate test suite."""

import sys
from pathlib import Path

# Repo root on the path so tests import the package without installing it
sys.path.insert(0, str(Path(__file__).parent.parent))
