class DuscanError(Exception):
    """Base class for errors that abort a whole invocation."""


class PathNotFoundError(DuscanError):
    def __init__(self, path: str) -> None:
        self.path: str = path
        super().__init__(f"{path} is neither a file nor a directory.")


class NotAValidPathError(DuscanError):
    def __init__(self, path: str) -> None:
        self.path: str = path
        super().__init__(f"Not a valid file or directory: {path}")


class InvalidModeError(DuscanError):
    def __init__(self, mode: object) -> None:
        self.mode: object = mode
        super().__init__(f"Not a valid mode: {mode!r}")
