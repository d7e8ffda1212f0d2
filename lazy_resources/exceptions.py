"""Exception classes for lazy-resources."""


class LazyResourcesError(Exception):
    """Base exception for all lazy-resources errors."""
    pass


class ResolutionError(LazyResourcesError):
    """Raised when a member cannot be resolved to exactly one resource."""

    def __init__(self, message: str, member: str):
        super().__init__(message)
        self.member = member


class ResourceNotFoundError(ResolutionError):
    """Raised when no catalog entry matches a requested member."""

    def __init__(self, member: str):
        super().__init__(
            f"Unable to find any resources that matches '{member}'",
            member,
        )


class AmbiguousResourceError(ResolutionError):
    """Raised when more than one catalog entry matches a requested member."""

    def __init__(self, member: str, candidates: list[str] | None = None):
        self.candidates = list(candidates or [])
        super().__init__(
            f"Found multiple resources matching '{member}' "
            f"({', '.join(self.candidates)})",
            member,
        )


class UnresolvedMemberError(LazyResourcesError):
    """Raised when an accessor is asked for a member it does not declare."""

    def __init__(self, member: str):
        super().__init__(f"No member named '{member}' is declared on this accessor")
        self.member = member


class ShapeError(LazyResourcesError):
    """Raised when a target shape cannot be turned into an accessor."""
    pass


class ContainerError(LazyResourcesError):
    """Raised when a resource container cannot be created or enumerated."""
    pass


class ConfigurationError(LazyResourcesError):
    """Raised when settings are malformed."""
    pass
