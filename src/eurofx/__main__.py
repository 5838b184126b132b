# src/eurofx/__main__.py
"""Module entry point: python -m eurofx"""
import sys

from eurofx.app import main

sys.exit(main())
