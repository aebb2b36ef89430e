#!/usr/bin/env python3
"""
Setup script for tap-tempo package.
"""

from setuptools import setup

# This file is used in combination with pyproject.toml
# It ensures compatibility with older tools
if __name__ == "__main__":
    setup()
