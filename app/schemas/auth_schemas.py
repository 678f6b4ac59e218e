from pydantic import BaseModel
from typing import List


class ClaimOut(BaseModel):
    type: str
    value: str


class PrincipalOut(BaseModel):
    roles: List[str]
    claims: List[ClaimOut]
    policies: List[str]
