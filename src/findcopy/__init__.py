"""
findcopy - copy the files named in a list out of a source tree.

The source directory is searched recursively for every name in the file
list, and matches are copied flat into the target directory. Runs are
dry by default.
"""

__version__ = "0.1.0"
