"""Filesystem primitives for commonfs.

``commonfs.fs.filesystem.CommonFileSystem`` is the entry point; the other
modules hold the path, filename, shortcut, stream and copy/move helpers it
delegates to.
"""
