"""Access scopes restricting which fields a caller may see."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True, eq=False)
class AccessScope:
    """Node in a caller-defined access hierarchy.

    A scope covers its descendants: an `admin` scope with a `user` child sees
    every field a `user` sees, plus its own. Scopes compare by identity.

    Two sentinels exist beside user-defined scopes:

    - `AccessScope.NONE` requires (and grants) no access. Fields default to it,
      so they are visible to every caller.
    - Python `None` grants full access as a caller scope, and requires full access
      as a field scope.
    """

    NONE: ClassVar[AccessScope]

    name: str
    parent: AccessScope | None = None

    def lineage(self) -> list[AccessScope]:
        """Return this scope followed by its ancestors, nearest first."""
        chain: list[AccessScope] = []
        current: AccessScope | None = self
        while current is not None:
            chain.append(current)
            current = current.parent
        return chain

    def extends(self, other: AccessScope) -> bool:
        """Return whether `other` is this scope or one of its ancestors."""
        return any(scope is other for scope in self.lineage())

    def child(self, name: str) -> AccessScope:
        """Declare a narrower scope covered by this one."""
        return AccessScope(name=name, parent=self)

    def __str__(self) -> str:
        """Return the dotted lineage, root first."""
        return ".".join(scope.name for scope in reversed(self.lineage()))


AccessScope.NONE = AccessScope(name="none")


def grants_access_to(scope: AccessScope | None, required: AccessScope | None) -> bool:
    """Check whether a caller scope grants access to a field's required scope.

    Args:
        scope (AccessScope | None): Caller scope, None meaning full access.
        required (AccessScope | None): Scope required by the field, None meaning full access.

    Returns:
        bool: True when the field is visible to the caller, that is when the
            caller is the required scope or one of its ancestors.
    """
    if scope is required or scope is None:
        return True
    if required is None:
        return False
    if required is AccessScope.NONE:
        return True
    if scope is AccessScope.NONE:
        return False
    return required.extends(scope)
