"""
Named authorization policies.

Each policy is a plain predicate over the caller's role names and
(claim_type, claim_value) pairs. The table is the single place where
who-may-do-what is decided; routers only ask for a policy by name.
"""
from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, List, Tuple

ADMIN = "Admin"
MANAGER = "Manager"
PERMISSION = "Permission"

Claim = Tuple[str, str]
PolicyFn = Callable[[FrozenSet[str], FrozenSet[Claim]], bool]


class UnknownPolicy(KeyError):
    pass


@dataclass(frozen=True)
class Principal:
    roles: FrozenSet[str] = frozenset()
    claims: FrozenSet[Claim] = frozenset()

    def is_in_role(self, role: str) -> bool:
        return role in self.roles

    def has_claim(self, claim_type: str, value: str) -> bool:
        return (claim_type, value) in self.claims


def _perm(claims: FrozenSet[Claim], name: str) -> bool:
    return (PERMISSION, name) in claims


POLICIES: Dict[str, PolicyFn] = {
    # Admins or Managers, or anyone explicitly allowed to view users
    "ViewUsersPolicy": lambda roles, claims: (
        ADMIN in roles or MANAGER in roles or _perm(claims, "ViewUsers")
    ),
    "AddUserPolicy": lambda roles, claims: (
        ADMIN in roles or _perm(claims, "AddUser")
    ),
    "EditUserPolicy": lambda roles, claims: (
        ADMIN in roles or _perm(claims, "EditUser")
    ),
    # deleting needs both the role and the permission
    "DeleteUserPolicy": lambda roles, claims: (
        ADMIN in roles and _perm(claims, "DeleteUser")
    ),
    "ManageUsersPolicy": lambda roles, claims: (
        ADMIN in roles or _perm(claims, "EditUser") or _perm(claims, "ManageUsers")
    ),
    # Admin AND the full role-management permission set
    "ManageRolesPolicy": lambda roles, claims: (
        ADMIN in roles
        and _perm(claims, "AddRole")
        and _perm(claims, "EditRole")
        and _perm(claims, "DeleteRole")
    ),
    "ManageUserClaimsPolicy": lambda roles, claims: (
        ADMIN in roles or _perm(claims, "ManageUserClaims")
    ),
}


def evaluate(policy_name: str, principal: Principal) -> bool:
    try:
        policy = POLICIES[policy_name]
    except KeyError:
        raise UnknownPolicy(policy_name) from None
    return bool(policy(frozenset(principal.roles), frozenset(principal.claims)))


def granted_policies(principal: Principal) -> List[str]:
    return [name for name in POLICIES if evaluate(name, principal)]
