from typing import Optional

from fastapi import Depends, Header, HTTPException, status

from app.services.authorization import PERMISSION, Principal, evaluate

# ------------------------------
# Identity comes from the upstream auth proxy:
#   X-User-Roles:  Admin,Manager
#   X-User-Claims: Permission:ViewUsers,AddUser
# A claim without a type is a Permission claim.
# ------------------------------


def _split(raw: Optional[str]):
    if not raw:
        return []
    return [p.strip() for p in raw.split(",") if p.strip()]


def parse_claims(raw: Optional[str]):
    claims = set()
    for item in _split(raw):
        if ":" in item:
            claim_type, value = item.split(":", 1)
            claims.add((claim_type.strip() or PERMISSION, value.strip()))
        else:
            claims.add((PERMISSION, item))
    return frozenset(claims)


def get_principal(
        x_user_roles: Optional[str] = Header(None),
        x_user_claims: Optional[str] = Header(None),
) -> Principal:
    return Principal(
        roles=frozenset(_split(x_user_roles)),
        claims=parse_claims(x_user_claims),
    )


def require_policy(policy_name: str):
    def checker(principal: Principal = Depends(get_principal)) -> Principal:
        if not evaluate(policy_name, principal):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Not allowed: {policy_name}",
            )
        return principal

    return checker
