"""
Resolución del principal autenticado a partir de un token crudo.

Independiente de FastAPI: la dependencia en `api/deps.py` solo extrae el token
de los headers y enlaza el resultado al request.
"""
from typing import Optional

from notes_app.core.exceptions import InvalidToken, MissingToken
from notes_app.services.token_service import TokenService

BEARER_PREFIX = "Bearer "


def extract_token(authorization: Optional[str] = None, auth_token: Optional[str] = None) -> Optional[str]:
    """Toma `Authorization: Bearer <t>` y, si no viene, el header legado `auth-token`."""
    if authorization:
        if authorization.startswith(BEARER_PREFIX):
            token = authorization[len(BEARER_PREFIX):].strip()
        else:
            token = authorization.strip()
        if token:
            return token
    if auth_token:
        return auth_token.strip() or None
    return None


def authenticate(token: Optional[str], tokens: TokenService) -> str:
    """Devuelve el user id del token o lanza MissingToken / InvalidToken."""
    if not token:
        raise MissingToken()
    user_id = tokens.verify(token)
    if user_id is None:
        raise InvalidToken()
    return user_id
