"""Exceptions raised by kaizen workflows.

Everything a command can fail with derives from KaizenError so the CLI can
turn it into a single error line and a non-zero exit status.
"""


class KaizenError(Exception):
    """base class for user-facing failures"""


class NetworkNotFoundError(KaizenError):
    pass


class NameResolutionError(KaizenError):
    """a single SuiNS endpoint could not resolve a name"""


class NameNotFoundError(KaizenError):
    pass


class SuiRpcError(KaizenError):
    def __init__(self, method: str, message: str, code=None):
        self.method = method
        self.code = code
        super().__init__(f"{method} failed: {message}" + (f" (code {code})" if code is not None else ""))


class ObjectNotFoundError(KaizenError):
    pass


class PreconditionError(KaizenError):
    """raised before any network activity when inputs are unusable"""


class MissingCredentialError(PreconditionError):
    def __init__(self, names):
        self.names = list(names)
        super().__init__(f"Missing {', '.join(self.names)} in environment")


class InvalidConfigError(PreconditionError):
    pass


class LaunchAbortedError(KaizenError):
    pass


class UploadError(KaizenError):
    pass


class CodegenError(KaizenError):
    pass


class ToolchainError(KaizenError):
    def __init__(self, command, returncode, output: str):
        self.command = list(command)
        self.returncode = returncode
        self.output = output
        message = f"'{' '.join(self.command)}' failed"
        if returncode is not None:
            message += f" with exit code {returncode}"
        if output:
            message += f":\n{output.rstrip()}"
        super().__init__(message)


class DeployError(KaizenError):
    pass
