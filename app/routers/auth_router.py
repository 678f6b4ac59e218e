from fastapi import APIRouter, Depends

from app.services.authorization import POLICIES, Principal, granted_policies
from app.schemas.auth_schemas import ClaimOut, PrincipalOut
from app.utils.security import get_principal

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.get("/policies")
def list_policies():
    return sorted(POLICIES)


@router.get("/me", response_model=PrincipalOut)
def whoami(principal: Principal = Depends(get_principal)):
    return PrincipalOut(
        roles=sorted(principal.roles),
        claims=[ClaimOut(type=t, value=v) for t, v in sorted(principal.claims)],
        policies=granted_policies(principal),
    )
