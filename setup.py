#!/usr/bin/env python3
"""
Build configuration for httpdefer.

This setup.py configures:
1. The pure-Python httpdefer package from src/
2. urllib3 as the network transport
3. The test extra (pytest, python-dotenv)
"""

import re
from pathlib import Path

from setuptools import find_packages, setup

# Base directories
ROOT_DIR = Path(__file__).parent
SRC_DIR = Path("src")

# Single source of truth for the version: src/httpdefer/__init__.py
INIT_FILE = ROOT_DIR / SRC_DIR / "httpdefer" / "__init__.py"
VERSION = re.search(r'^__version__ = "([^"]+)"', INIT_FILE.read_text(), re.M).group(1)

INSTALL_REQUIRES = [
    "urllib3>=2.0",
]

EXTRAS_REQUIRE = {
    "test": [
        "pytest>=7.0",
        "python-dotenv>=1.0",
    ],
}

if __name__ == "__main__":
    setup(
        name="httpdefer",
        version=VERSION,
        description="HTTP client with blocking requests and a deferred background request slot",
        license="MIT",
        python_requires=">=3.8",
        package_dir={"": str(SRC_DIR)},
        packages=find_packages(str(SRC_DIR)),
        install_requires=INSTALL_REQUIRES,
        extras_require=EXTRAS_REQUIRE,
    )
