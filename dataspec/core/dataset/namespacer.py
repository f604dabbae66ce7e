"""
Namespacing of embedded datasets.

Every embedded dataset gets a name derived from the enclosing dataset so that
the same local name under two different roots yields two distinct datasets.

Naming rules:
  - the root keeps its own name
  - an embedded dataset with local name ``L`` under root ``R`` becomes ``R.L``
  - an embedded dataset with an empty local name folds into the prefix: ``R``
  - the prefix is always the root name, at any depth, so a grandchild ``B``
    under ``R`` -> ``A`` becomes ``R.B``, not ``R.A.B``

Existing catalogs hold names produced by these rules, so the last one must not
be changed to a fully dotted path.

Embedded specs handed to a builder are usually finished trees themselves
(``A`` was built with its own child ``A.B``). Their descendants are renamed
from their local names, recovered by stripping the finished tree's root name.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Optional, Union

if TYPE_CHECKING:
    from dataspec.core.dataset.specification import DatasetSpecification

_log = logging.getLogger("dataspec.build")


@dataclass(frozen=True)
class AtRoot:
    pass


@dataclass(frozen=True)
class Nested:
    prefix: str


Scope = Union[AtRoot, Nested]

AT_ROOT = AtRoot()


def local_name(name: str, tree_root: str) -> str:
    """Invert namespacing for a node of a finished tree rooted at ``tree_root``."""
    if name == tree_root:
        return ""
    if name.startswith(tree_root + "."):
        return name[len(tree_root) + 1:]
    return name


def namespaced_name(scope: Scope, name: str) -> str:
    if isinstance(scope, Nested):
        return f"{scope.prefix}.{name}" if name else scope.prefix
    return name


def namespace(spec: "DatasetSpecification") -> "DatasetSpecification":
    """Return a new tree with every embedded dataset renamed under ``spec``'s name.

    ``spec`` is a raw tree: its own name and its direct children's names are
    local names.
    """
    return _namespace(AT_ROOT, spec, spec.name, None)


def _namespace(
    scope: Scope,
    spec: "DatasetSpecification",
    given_name: str,
    tree_root: Optional[str],
) -> "DatasetSpecification":
    name = namespaced_name(scope, given_name)
    if isinstance(scope, Nested):
        # Children inherit the ancestor prefix, not this node's new name
        child_scope: Scope = scope
    else:
        child_scope = Nested(given_name)

    children: Dict[str, "DatasetSpecification"] = {}
    for child in spec.specifications.values():
        if tree_root is None:
            # Direct children of the raw root: each is the root of its own tree
            renamed = _namespace(child_scope, child, child.name, child.name)
        else:
            renamed = _namespace(child_scope, child, local_name(child.name, tree_root), tree_root)
        children[renamed.name] = renamed

    _log.debug("namespaced %r -> %r (%d embedded)", spec.name, name, len(children))
    return spec._renamed(name, children)
