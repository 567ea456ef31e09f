"""
hashcheck: Directory hash manifests.

Create a per-file digest manifest for a directory tree and verify the tree
against it later, reporting mismatched, missing, and extra files.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
