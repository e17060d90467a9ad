"""
syncjobs package
- Runs declarative tar+scp archive jobs and rsync mirror jobs against SSH servers.
"""
__all__ = ["cli", "config", "models", "core", "operations", "state", "utils"]
__version__ = "0.1.0"
