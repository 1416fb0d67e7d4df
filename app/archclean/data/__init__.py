"""Bundled data files for archclean."""
