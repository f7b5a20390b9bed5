"""recyclebin - a user-space recycle bin.

Deleted files and directories are moved into a quarantine store with
enough metadata to put them back where they came from.
"""

__version__ = "0.3.0"
