"""Navigation tree resolution and validation."""

from .errors import (
    DepthExceededError,
    DuplicateOverrideError,
    DuplicateSlugError,
    InvalidNavigationError,
    NavigationError,
    NotValidatedError,
    UnknownLocaleError,
)
from .locales import Locale, LocaleCatalog, LocaleSet
from .redirects import RedirectRule, RedirectTable
from .registry import SlugRegistry
from .resolver import ResolvedNode, ResolvedTree, resolve, resolve_all
from .snapshot import NavSnapshot, SnapshotStore
from .tree import NavTree, NavTreeBuilder, Node, NodeKind
from .validator import ValidationReport, Violation, ViolationKind, validate

__all__ = [
    'DepthExceededError',
    'DuplicateOverrideError',
    'DuplicateSlugError',
    'InvalidNavigationError',
    'Locale',
    'LocaleCatalog',
    'LocaleSet',
    'NavSnapshot',
    'NavTree',
    'NavTreeBuilder',
    'NavigationError',
    'Node',
    'NodeKind',
    'NotValidatedError',
    'RedirectRule',
    'RedirectTable',
    'ResolvedNode',
    'ResolvedTree',
    'SlugRegistry',
    'SnapshotStore',
    'UnknownLocaleError',
    'ValidationReport',
    'Violation',
    'ViolationKind',
    'resolve',
    'resolve_all',
    'validate',
]
