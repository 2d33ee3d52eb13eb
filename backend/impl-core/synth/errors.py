class ImplerError(Exception):
    """Implementation of a type failed; terminal for the current request."""


class UnsupportedToken(ImplerError):
    """The type can never be implemented (primitive, array, Enum, final, private...)."""


class InaccessibleAncestor(ImplerError):
    """A class in the superclass chain is private."""


class NoAccessibleConstructor(ImplerError):
    """No constructor of the type is visible to a subclass."""


class CompilationFailed(ImplerError):
    """The external compiler is missing or reported a non-zero exit status."""


class IOFailure(ImplerError):
    """Resolving, creating or writing an output path failed."""


class OpaqueAncestor(UnsupportedToken):
    """A supertype's members are unknown: its source is not loaded and it has no built-in model."""
