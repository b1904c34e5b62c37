"""Central path configuration for the Codenames engine."""

from pathlib import Path

# Package directory (codenames_engine/)
PACKAGE_DIR = Path(__file__).parent

# Bundled resources
DATA_DIR = PACKAGE_DIR / "data"
WORDLIST_PATH = DATA_DIR / "wordlist.txt"
