"""Browse, preview, rename and upload files on a remote host over SSH."""

__version__ = "0.1.0"