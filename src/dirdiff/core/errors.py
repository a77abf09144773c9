"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/errors.py
"""


class DeletionError(RuntimeError):
    """
    Raised when a file or directory cannot be removed and the run must stop.
    The filesystem state is unknown at that point, so no further mutation happens.
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to remove {path}: {reason}")
