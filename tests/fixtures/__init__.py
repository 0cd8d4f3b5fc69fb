"""Test fixtures for the Cerberus pipeline.

Provides sample markdown documents for every document type the
parsers handle.
"""

from .markdown import *
