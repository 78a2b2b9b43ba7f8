"""Construction-time errors for navigation structures.

All errors describe defects in the configuration, never transient faults.
They derive from ValueError so configuration loaders can treat them like
any other malformed input.
"""


class NavigationError(ValueError):
    """Base class for navigation configuration errors."""


class DuplicateSlugError(NavigationError):
    """Slug is already registered."""

    def __init__(self, slug: str) -> None:
        super().__init__(f"Duplicate slug: {slug}")
        self.slug = slug


class DepthExceededError(NavigationError):
    """Node would be nested deeper than the configured bound."""

    def __init__(self, depth: int, max_depth: int) -> None:
        super().__init__(f"Nesting depth {depth} exceeds maximum of {max_depth}")
        self.depth = depth
        self.max_depth = max_depth


class UnknownLocaleError(NavigationError):
    """Locale code is not part of the configured locale set."""

    def __init__(self, locale: str) -> None:
        super().__init__(f"Unknown locale: {locale}")
        self.locale = locale


class DuplicateOverrideError(NavigationError):
    """Label override already exists for the node and locale."""

    def __init__(self, node: int, locale: str) -> None:
        super().__init__(f"Duplicate label override for node {node} in locale {locale}")
        self.node = node
        self.locale = locale


class NotValidatedError(NavigationError):
    """Resolution was requested without a validation report."""

    def __init__(self) -> None:
        super().__init__(
            "Navigation must be validated before resolution "
            "(pass a report or allow_unvalidated=True)",
        )


class InvalidNavigationError(NavigationError):
    """Resolution was refused because validation found fatal violations."""

    def __init__(self, violations: list) -> None:
        summary = "; ".join(v.message for v in violations)
        super().__init__(f"Navigation has {len(violations)} fatal violation(s): {summary}")
        self.violations = violations
