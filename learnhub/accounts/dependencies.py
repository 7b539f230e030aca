"""FastAPI dependencies for accounts.

Every request gets its own AccountStore: the account list is shared through
the application storage, while the session lives in a storage scope owned by
the requesting client (identified by a random cookie).
"""

import re
import secrets
from typing import Annotated

from fastapi import Depends, HTTPException, Request, Response, status

from learnhub.catalog import Catalog
from learnhub.config.settings import Settings, get_settings
from learnhub.core.context import set_client_id, set_user_id
from learnhub.core.storage import KeyValueStorage, ScopedStorage

from .models import Session
from .service import AccountStore


_CLIENT_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{16,64}$")

SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_storage(request: Request) -> KeyValueStorage:
    """Application-wide key-value storage."""
    return request.app.state.storage


def get_catalog(request: Request) -> Catalog:
    """Application-wide course catalog."""
    return request.app.state.catalog


StorageDep = Annotated[KeyValueStorage, Depends(get_storage)]
CatalogDep = Annotated[Catalog, Depends(get_catalog)]


def get_client_id(request: Request, response: Response, settings: SettingsDep) -> str:
    """Read the client cookie, issuing a new one when missing or malformed."""
    client_id = request.cookies.get(settings.session_cookie_name)
    if not client_id or not _CLIENT_ID_PATTERN.match(client_id):
        client_id = secrets.token_urlsafe(24)
        response.set_cookie(
            key=settings.session_cookie_name,
            value=client_id,
            max_age=settings.session_cookie_max_age_days * 24 * 60 * 60,
            httponly=True,
            secure=settings.session_cookie_secure,
            samesite=settings.session_cookie_samesite,
        )

    request.state.client_id = client_id
    set_client_id(client_id)
    return client_id


ClientId = Annotated[str, Depends(get_client_id)]


def get_account_store(
    request: Request,
    storage: StorageDep,
    catalog: CatalogDep,
    client_id: ClientId,
    settings: SettingsDep,
) -> AccountStore:
    """AccountStore bound to the requesting client's session."""
    store = AccountStore(
        storage=storage,
        catalog=catalog,
        session_storage=ScopedStorage(storage, f"client:{client_id}"),
        password_min_length=settings.password_min_length,
    )
    if store.current_user is not None:
        request.state.user_id = store.current_user.id
        set_user_id(store.current_user.id)
    return store


AccountStoreDep = Annotated[AccountStore, Depends(get_account_store)]


def get_current_user(store: AccountStoreDep) -> Session:
    """Session of the requesting client.

    Raises:
        HTTPException(401): If the client is not logged in
    """
    if store.current_user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Login required",
        )
    return store.current_user


CurrentUser = Annotated[Session, Depends(get_current_user)]
