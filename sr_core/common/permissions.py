# sr_core/common/permissions.py
"""
Role checks for the API.

Roles are Django auth groups. Each permission class lists, per role, the
viewset actions that role may run; ADMIN may run everything.
"""
from __future__ import annotations

from rest_framework.permissions import BasePermission, SAFE_METHODS

ROLE_ADMIN = "ADMIN"
ROLE_STAFF = "STAFF"
ROLE_PARENT = "PARENT"
ROLE_READONLY = "READONLY"

ALL_ROLES = (ROLE_ADMIN, ROLE_STAFF, ROLE_PARENT, ROLE_READONLY)

READ = frozenset({"list", "retrieve"})
WRITE = frozenset({"create", "update", "partial_update"})

_METHOD_ACTIONS = {
    "POST": "create",
    "PUT": "update",
    "PATCH": "partial_update",
    "DELETE": "destroy",
}


def user_roles(user) -> set[str]:
    """
    Group names of an authenticated user. Superusers count as ADMIN only,
    and a user outside every group reads as READONLY.
    """
    if not user or not getattr(user, "is_authenticated", False):
        return set()
    if getattr(user, "is_superuser", False):
        return {ROLE_ADMIN}

    names = set(user.groups.values_list("name", flat=True))
    return names or {ROLE_READONLY}


def is_parent_only(roles: set[str]) -> bool:
    return roles == {ROLE_PARENT}


def view_action(request, view) -> str | None:
    """Router action name; plain APIViews get one derived from the method."""
    if getattr(view, "action", None):
        return view.action
    if request.method in SAFE_METHODS:
        return "retrieve" if getattr(view, "kwargs", None) else "list"
    return _METHOD_ACTIONS.get(request.method)


class RolePermission(BasePermission):
    message = "You do not have permission to perform this action."

    # role -> actions; override per viewset
    grants: dict[str, frozenset] = {}

    def actions_for(self, roles: set[str]) -> set[str]:
        allowed: set[str] = set()
        for role in roles:
            allowed |= self.grants.get(role, frozenset())
        return allowed

    def has_permission(self, request, view) -> bool:
        roles = user_roles(request.user)
        if not roles:
            return False
        if ROLE_ADMIN in roles:
            return True
        return view_action(request, view) in self.actions_for(roles)


class RegistrationPermission(RolePermission):
    """
    Parents submit and correct registrations; staff assist. An account that
    is only a PARENT registers under its own email and reaches a child's
    registration only when it owns it.
    """
    grants = {
        ROLE_STAFF: READ | WRITE | {"enrollment"},
        ROLE_PARENT: {"retrieve", "enrollment"} | WRITE,
        ROLE_READONLY: {"retrieve"},
    }

    def has_permission(self, request, view) -> bool:
        if not super().has_permission(request, view):
            return False
        if not is_parent_only(user_roles(request.user)):
            return True

        if view_action(request, view) == "create":
            return self._registers_self(request)

        child_id = (getattr(view, "kwargs", None) or {}).get("pk")
        if child_id is None:
            return True

        from sr_core.students.models import Child

        # unknown ids stay 404s in the view
        owner = Child.objects.filter(pk=child_id).values_list("parent_user_id", flat=True).first()
        return owner is None or owner == request.user.pk

    @staticmethod
    def _registers_self(request) -> bool:
        # the owner email must be the caller's; a missing one fails validation later
        data = getattr(request, "data", None)
        email = data.get("email") if hasattr(data, "get") else None
        if not isinstance(email, str) or not email.strip():
            return True
        return email.strip().casefold() == (request.user.email or "").strip().casefold()


class StudentPermission(RolePermission):
    """Student roster; not open to parents."""
    grants = {
        ROLE_STAFF: READ | {"partial_update"},
        ROLE_READONLY: READ,
    }


class CatalogPermission(RolePermission):
    """Lookup tables: everyone reads, only ADMIN edits."""
    grants = {
        ROLE_STAFF: READ,
        ROLE_PARENT: READ,
        ROLE_READONLY: READ,
    }


class UserAdminPermission(RolePermission):
    grants = {}
