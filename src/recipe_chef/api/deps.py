"""FastAPI dependencies and their ``*Dep`` aliases.

The application stores its long-lived collaborators on ``app.state`` at
creation time; these dependencies hand them to the route functions. Tests
override them through ``app.dependency_overrides[get_xxx]``.
"""

from typing import Annotated, Optional

from fastapi import Depends, Header, Request

from recipe_chef.chef_core import ChefSettings, DictionaryStore
from recipe_chef.chef_impl import ChefFactory

BEARER_PREFIX = "Bearer "


def get_factory(request: Request) -> ChefFactory:
    return request.app.state.factory


def get_app_settings(request: Request) -> ChefSettings:
    return request.app.state.settings


def get_dictionary_store(request: Request) -> DictionaryStore:
    return request.app.state.dictionary_store


def get_bearer_token(authorization: Annotated[Optional[str], Header()] = None) -> Optional[str]:
    """The bearer token of the ``Authorization`` header, if any."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    return authorization[len(BEARER_PREFIX):].strip() or None


FactoryDep = Annotated[ChefFactory, Depends(get_factory)]
SettingsDep = Annotated[ChefSettings, Depends(get_app_settings)]
DictionaryStoreDep = Annotated[DictionaryStore, Depends(get_dictionary_store)]
BearerTokenDep = Annotated[Optional[str], Depends(get_bearer_token)]
