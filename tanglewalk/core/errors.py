"""Exceptions and warnings raised by tanglewalk.

Read-only traversal never raises on its own; everything here comes from
configuration problems or from mutating operations that need capabilities
a node type has not supplied.
"""


class TanglewalkError(Exception):
    """Base class for all tanglewalk errors."""
    pass


class ConfigurationError(TanglewalkError, ValueError):
    """Raised when a walk configuration cannot be executed."""
    pass


class MissingCapabilityError(TanglewalkError, NotImplementedError):
    """Raised when a mutating operation needs a capability a node lacks.

    The message always names the offending type so the caller knows which
    ``register`` call is missing.
    """

    def __init__(self, capability: str, node: object):
        self.capability = capability
        self.node_type = type(node)
        super().__init__(
            f"tanglewalk.{capability}() is not implemented for "
            f"{self.node_type.__module__}.{self.node_type.__qualname__}. "
            f"Register one with `@tanglewalk.{capability}.register("
            f"{self.node_type.__qualname__})`."
        )


class CloneError(TanglewalkError):
    """Raised when a node could not be cloned before a non-inplace rebuild."""

    def __init__(self, node: object, cause: BaseException = None):
        self.node = node
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(
            f"Could not clone node of type {type(node).__qualname__}{detail}"
        )


class CycleWarning(UserWarning):
    """Emitted when a bottom-up walk drops nodes that sit on a cycle."""
    pass
