import pytest

from app.services.authorization import (
    POLICIES,
    Principal,
    UnknownPolicy,
    evaluate,
    granted_policies,
)
from app.utils.security import parse_claims


def principal(roles=(), perms=()):
    return Principal(
        roles=frozenset(roles),
        claims=frozenset(("Permission", p) for p in perms),
    )


ANONYMOUS = principal()
ADMIN = principal(roles=["Admin"])
MANAGER = principal(roles=["Manager"])


def test_policy_table_names():
    assert set(POLICIES) == {
        "ViewUsersPolicy",
        "AddUserPolicy",
        "EditUserPolicy",
        "DeleteUserPolicy",
        "ManageUsersPolicy",
        "ManageRolesPolicy",
        "ManageUserClaimsPolicy",
    }


def test_nobody_gets_anything_without_roles_or_claims():
    assert granted_policies(ANONYMOUS) == []


@pytest.mark.parametrize("who, allowed", [
    (ADMIN, True),
    (MANAGER, True),
    (principal(perms=["ViewUsers"]), True),
    (principal(perms=["EditUser"]), False),
    (principal(roles=["Tenant"]), False),
])
def test_view_users(who, allowed):
    assert evaluate("ViewUsersPolicy", who) is allowed


def test_add_and_edit_users_are_admin_or_permission():
    assert evaluate("AddUserPolicy", ADMIN)
    assert evaluate("AddUserPolicy", principal(perms=["AddUser"]))
    assert not evaluate("AddUserPolicy", MANAGER)

    assert evaluate("EditUserPolicy", ADMIN)
    assert evaluate("EditUserPolicy", principal(perms=["EditUser"]))
    assert not evaluate("EditUserPolicy", principal(perms=["AddUser"]))


def test_delete_user_needs_role_and_permission():
    assert not evaluate("DeleteUserPolicy", ADMIN)
    assert not evaluate("DeleteUserPolicy", principal(perms=["DeleteUser"]))
    assert evaluate("DeleteUserPolicy", principal(roles=["Admin"], perms=["DeleteUser"]))


def test_manage_users_accepts_edit_or_manage_permission():
    assert evaluate("ManageUsersPolicy", ADMIN)
    assert evaluate("ManageUsersPolicy", principal(perms=["EditUser"]))
    assert evaluate("ManageUsersPolicy", principal(perms=["ManageUsers"]))
    assert not evaluate("ManageUsersPolicy", MANAGER)


def test_manage_roles_needs_admin_and_full_permission_set():
    full = ["AddRole", "EditRole", "DeleteRole"]
    assert evaluate("ManageRolesPolicy", principal(roles=["Admin"], perms=full))
    assert not evaluate("ManageRolesPolicy", principal(perms=full))
    for missing in full:
        partial = [p for p in full if p != missing]
        assert not evaluate("ManageRolesPolicy", principal(roles=["Admin"], perms=partial))


def test_manage_user_claims():
    assert evaluate("ManageUserClaimsPolicy", ADMIN)
    assert evaluate("ManageUserClaimsPolicy", principal(perms=["ManageUserClaims"]))
    assert not evaluate("ManageUserClaimsPolicy", MANAGER)


def test_claim_type_matters():
    wrong_type = Principal(claims=frozenset({("Scope", "ViewUsers")}))
    assert not evaluate("ViewUsersPolicy", wrong_type)


def test_unknown_policy_raises():
    with pytest.raises(UnknownPolicy):
        evaluate("LaunchRocketsPolicy", ADMIN)


def test_admin_without_claims_gets_the_or_policies_only():
    assert granted_policies(ADMIN) == [
        "ViewUsersPolicy",
        "AddUserPolicy",
        "EditUserPolicy",
        "ManageUsersPolicy",
        "ManageUserClaimsPolicy",
    ]


def test_parse_claims_defaults_to_permission_type():
    assert parse_claims("ViewUsers, Permission:AddUser ,Scope:read,,") == frozenset({
        ("Permission", "ViewUsers"),
        ("Permission", "AddUser"),
        ("Scope", "read"),
    })
    assert parse_claims(None) == frozenset()
