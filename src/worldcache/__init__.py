"""
worldcache: keeps a disk snapshot of live world directories and archives it.
"""

__version__ = "0.1.0"
