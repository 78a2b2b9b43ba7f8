"""Locale resolution of navigation trees.

Produces a render-ready copy of the tree for one locale: same structure,
same order, labels looked up through the catalog's fallback rule.
"""

from dataclasses import dataclass
from typing import TypedDict

from docnav.core.errors import InvalidNavigationError, NotValidatedError
from docnav.core.locales import LocaleCatalog
from docnav.core.tree import NavTree, Node
from docnav.core.types import LocaleCode, Slug
from docnav.core.validator import ValidationReport


class ResolvedNodeDict(TypedDict, total=False):
    """Dictionary representation of a resolved node."""

    label: str
    slug: str | None
    path: str | None
    children: list["ResolvedNodeDict"]


@dataclass(frozen=True)
class ResolvedNode:
    """Navigation node with its label in the target locale."""

    label: str
    slug: Slug | None
    path: str | None
    children: tuple["ResolvedNode", ...] = ()

    def to_dict(self) -> ResolvedNodeDict:
        """Convert to dictionary for JSON serialization."""
        result: ResolvedNodeDict = {"label": self.label, "slug": self.slug, "path": self.path}
        if self.slug is None:
            result["children"] = [child.to_dict() for child in self.children]
        return result


@dataclass(frozen=True)
class ResolvedTree:
    """Navigation tree resolved for one locale."""

    locale: LocaleCode
    items: tuple[ResolvedNode, ...]

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization."""
        return {"locale": self.locale, "items": [item.to_dict() for item in self.items]}


def resolve(
    tree: NavTree,
    catalog: LocaleCatalog,
    locale: str,
    *,
    report: ValidationReport | None = None,
    allow_unvalidated: bool = False,
) -> ResolvedTree:
    """Resolve every label of the tree for a locale.

    Args:
        tree: Navigation tree
        catalog: Label catalog for the tree's nodes
        locale: Requested locale code
        report: Validation report for this tree and catalog
        allow_unvalidated: Resolve without a report or despite fatal violations

    Returns:
        Resolved tree with structure and ordering of the input

    Raises:
        NotValidatedError: If no report is given and allow_unvalidated is False
        InvalidNavigationError: If the report has fatal violations and
            allow_unvalidated is False
        UnknownLocaleError: If the locale is not configured
    """
    if not allow_unvalidated:
        if report is None:
            raise NotValidatedError()
        if not report.is_valid:
            raise InvalidNavigationError(report.errors)

    code = catalog.locales.get(locale).code
    return ResolvedTree(
        locale=code,
        items=tuple(_resolve_node(tree, catalog, node, code) for node in tree.children()),
    )


def resolve_all(
    tree: NavTree,
    catalog: LocaleCatalog,
    *,
    report: ValidationReport | None = None,
    allow_unvalidated: bool = False,
) -> dict[LocaleCode, ResolvedTree]:
    """Resolve the tree for every configured locale."""
    return {
        locale.code: resolve(
            tree,
            catalog,
            locale.code,
            report=report,
            allow_unvalidated=allow_unvalidated,
        )
        for locale in catalog.locales
    }


def link_path(locale: str, slug: str) -> str:
    """Build the site path of a page in a locale (e.g., "/ru/basics/routing/")."""
    return f"/{locale}/{slug.strip('/')}/"


def _resolve_node(tree: NavTree, catalog: LocaleCatalog, node: Node, locale: LocaleCode) -> ResolvedNode:
    """Recursively resolve a node and its children."""
    return ResolvedNode(
        label=catalog.label_for(node.id, locale),
        slug=node.slug,
        path=link_path(locale, node.slug) if node.slug is not None else None,
        children=tuple(_resolve_node(tree, catalog, child, locale) for child in tree.children(node.id)),
    )
