"""lint2hub - post lint findings as GitHub pull request review comments."""

__version__ = "0.1.0"
