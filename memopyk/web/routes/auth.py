"""
Routes d'authentification du back-office.

Connexion par mot de passe unique ; le jeton renvoyé est ensuite présenté
dans l'en-tête "Authorization: Bearer <jeton>".
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from ...services.auth import TokenStore
from ..deps import bearer_token, get_token_store
from ..schemas import LoginRequest

router = APIRouter(prefix="/auth")


@router.post("/login")
def login(payload: LoginRequest, tokens: TokenStore = Depends(get_token_store)) -> dict:
    token = tokens.login(payload.password)
    if token is None:
        raise HTTPException(status_code=401, detail="Invalid password")
    return {"success": True, "token": token}


@router.post("/logout")
def logout(
    token: Optional[str] = Depends(bearer_token),
    tokens: TokenStore = Depends(get_token_store),
) -> dict:
    tokens.revoke(token)
    return {"success": True}


@router.get("/status")
def auth_status(
    token: Optional[str] = Depends(bearer_token),
    tokens: TokenStore = Depends(get_token_store),
) -> dict:
    return {"isAuthenticated": tokens.verify(token)}
