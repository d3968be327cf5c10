# sr_core/iam/selectors.py
from __future__ import annotations

from typing import Any

from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group

from sr_core.common.permissions import ALL_ROLES


def role_id_for_user(user) -> int | None:
    """
    The user's role is the role group they belong to (lowest id wins when
    several); None when they have none.
    """
    return (
        Group.objects.filter(user=user, name__in=ALL_ROLES)
        .order_by("id")
        .values_list("id", flat=True)
        .first()
    )


def find_user_by_email(email: str):
    User = get_user_model()
    return User.objects.filter(email__iexact=(email or "").strip()).order_by("id").first()


def user_summary(user) -> dict[str, Any]:
    return {
        "userid": user.id,
        "email": user.email,
        "roleid": role_id_for_user(user),
    }


def list_user_summaries() -> list[dict[str, Any]]:
    User = get_user_model()
    role_ids: dict[int, int] = {}
    links = (
        User.groups.through.objects.filter(group__name__in=ALL_ROLES)
        .order_by("group_id")
        .values_list("user_id", "group_id")
    )
    for user_id, group_id in links:
        role_ids.setdefault(user_id, group_id)

    return [
        {"userid": uid, "email": email, "roleid": role_ids.get(uid)}
        for uid, email in User.objects.order_by("id").values_list("id", "email")
    ]
