from fastapi import Depends, Header, HTTPException, Request
from pydantic import ValidationError

from talentsearch.schemas.auth import CurrentUser
from talentsearch.services.document_store import DocumentStore
from talentsearch.services.index_manager import SearchIndexManager
from talentsearch.services.retrieval_service import RetrievalService
from talentsearch.utils.security import decode_access_token


async def get_current_user(authorization: str | None = Header(None)) -> CurrentUser:
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Authentication invalid")
    payload = decode_access_token(authorization[7:])
    if payload is None:
        raise HTTPException(status_code=401, detail="Authentication invalid")
    try:
        return CurrentUser(user_id=payload.get("sub"), role=payload.get("role"))
    except ValidationError as exc:
        raise HTTPException(status_code=401, detail="Authentication invalid") from exc


def require_roles(*roles: str):
    async def dependency(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if user.role not in roles:
            raise HTTPException(status_code=403, detail="Not authorized to access this resource")
        return user

    return dependency


def get_document_store(request: Request) -> DocumentStore:
    return request.app.state.document_store


def get_index_manager(request: Request) -> SearchIndexManager:
    return request.app.state.index_manager


def get_retrieval_service(request: Request) -> RetrievalService:
    return request.app.state.retrieval_service
