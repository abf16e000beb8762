"""
Parse Data Models
-----------------
pydantic models for the payloads the Parse API returns.

Field names are snake_case in Python and use the API's camelCase on the
wire. Absent fields stay None and are left out when serialized.
"""

from datetime import datetime
from typing import Dict, Iterator, Optional

from pydantic import BaseModel, ConfigDict, Field, RootModel


# The key used by the API to represent public ACL permissions.
PUBLIC_PERMISSION_KEY = "*"

ROLE_KEY_PREFIX = "role:"


class ParseModel(BaseModel):
    """Base for API payloads: alias-aware and tolerant of extra fields."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def to_json_dict(self) -> Dict:
        """Dump as the API expects it, omitting absent fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Permissions(BaseModel):
    """Read & write permissions for one ACL scope."""
    read: bool = False
    write: bool = False


class ACL(RootModel[Dict[str, Permissions]]):
    """
    Permissions keyed by scope.

    A scope is the public wildcard, a user id, or a role name prefixed
    with "role:".
    """
    root: Dict[str, Permissions] = Field(default_factory=dict)

    def public(self) -> Optional[Permissions]:
        """Permissions for the public."""
        return self.root.get(PUBLIC_PERMISSION_KEY)

    def for_user_id(self, user_id: str) -> Optional[Permissions]:
        """Permissions for a specific user, if explicitly set."""
        return self.root.get(user_id)

    def for_role_name(self, role_name: str) -> Optional[Permissions]:
        """Permissions for a specific role name, if explicitly set."""
        return self.root.get(ROLE_KEY_PREFIX + role_name)

    def __getitem__(self, key: str) -> Permissions:
        return self.root[key]

    def __setitem__(self, key: str, value: Permissions) -> None:
        self.root[key] = value

    def __delitem__(self, key: str) -> None:
        del self.root[key]

    def __contains__(self, key: object) -> bool:
        return key in self.root

    def __iter__(self) -> Iterator[str]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def get(self, key: str, default: Optional[Permissions] = None) -> Optional[Permissions]:
        return self.root.get(key, default)


class Object(ParseModel):
    """Base object envelope returned on writes."""
    id: Optional[str] = Field(None, alias="objectId")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")


class TwitterAuth(ParseModel):
    id: Optional[str] = None
    screen_name: Optional[str] = None
    consumer_key: Optional[str] = None
    consumer_secret: Optional[str] = None
    auth_token: Optional[str] = None
    auth_token_secret: Optional[str] = None


class FacebookAuth(ParseModel):
    id: Optional[str] = None
    access_token: Optional[str] = None
    expiration_date: Optional[datetime] = None


class AnonymousAuth(ParseModel):
    id: Optional[str] = None


class AuthData(ParseModel):
    """Linked third-party identities, keyed by provider."""
    twitter: Optional[TwitterAuth] = None
    facebook: Optional[FacebookAuth] = None
    anonymous: Optional[AnonymousAuth] = None


class User(Object):
    """The built-in _User class."""
    email: Optional[str] = None
    username: Optional[str] = None
    phone: Optional[str] = None
    email_verified: Optional[bool] = Field(None, alias="emailVerified")
    session_token: Optional[str] = Field(None, alias="sessionToken")
    auth_data: Optional[AuthData] = Field(None, alias="authData")
