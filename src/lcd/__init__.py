"""
lcd - library change directory

Jump to any directory under a configured root by typing a short name or
fragment. Directories are indexed once into a flat snapshot file and search
terms are resolved against it.
"""

__version__ = "0.4.0"
__author__ = "lcd contributors"
