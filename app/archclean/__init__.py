"""archclean - interactive disk cleanup for Arch Linux."""

__version__ = "0.1.0"
