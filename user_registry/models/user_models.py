"""Data models for user registration and stored user records"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from user_registry.validation import is_strong_password

NAME_PATTERN = r"^[A-Za-z ]+$"
MOBILE_PATTERN = r"^[0-9]{10}$"
LOGIN_ID_PATTERN = r"^[A-Za-z0-9]{8}$"
EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"


class AddressIn(BaseModel):
    """Optional address block as submitted"""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None


class RegistrationRequest(BaseModel):
    """
    Raw registration body. Every field is optional here so that missing
    values reach the validator and produce its ordered error messages
    instead of a generic parsing error.
    """
    model_config = ConfigDict(coerce_numbers_to_str=True)

    firstName: Optional[str] = None
    lastName: Optional[str] = None
    mobileNo: Optional[str] = None
    emailId: Optional[str] = None
    address: Optional[AddressIn] = None
    loginId: Optional[str] = None
    password: Optional[str] = None
    connectionId: Optional[str] = None

    @property
    def display_name(self) -> str:
        """Name shown in the live users list"""
        return f"{self.firstName or ''} {self.lastName or ''}".strip()


class Address(BaseModel):
    """Stored address, absent parts normalised to empty strings"""
    street: str = Field(default="", pattern=r"^[A-Za-z ]*$")
    city: str = Field(default="", pattern=r"^[A-Za-z ]*$")
    state: str = Field(default="", pattern=r"^[A-Za-z ]*$")
    country: str = Field(default="", pattern=r"^[A-Za-z ]*$")


class UserDocument(BaseModel):
    """
    Record as written to the users collection.
    The field constraints duplicate the validator on purpose: the store
    refuses malformed records even when called without the API layer.
    """
    firstName: str = Field(pattern=NAME_PATTERN)
    lastName: str = Field(pattern=NAME_PATTERN)
    mobileNo: str = Field(pattern=MOBILE_PATTERN)
    emailId: str = Field(pattern=EMAIL_PATTERN)
    address: Address = Field(default_factory=Address)
    loginId: str = Field(pattern=LOGIN_ID_PATTERN)
    password: str
    createdAt: datetime
    updatedAt: datetime

    @field_validator("password")
    @classmethod
    def check_password_strength(cls, value: str) -> str:
        """Same strength rule as the API validator"""
        if not is_strong_password(value):
            raise ValueError("password is too weak")
        return value


class StoredAddress(BaseModel):
    """Address as read back, no charset rules so older records still load"""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    street: str = ""
    city: str = ""
    state: str = ""
    country: str = ""


class UserPublic(BaseModel):
    """Safe projection of a user, password is never included.
    Reads are lenient: whatever is in the collection is returned as text"""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    firstName: str = ""
    lastName: str = ""
    mobileNo: str = ""
    emailId: str = ""
    address: StoredAddress = Field(default_factory=StoredAddress)
    loginId: str = ""
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    @classmethod
    def from_document(cls, document: dict) -> "UserPublic":
        """Build from a raw mongo document (password already projected out)"""
        data = {key: value for key, value in document.items() if key not in ("_id", "password")}
        # records written by other clients may carry null parts
        data = {key: value for key, value in data.items() if value is not None}
        if isinstance(data.get("address"), dict):
            data["address"] = {key: value for key, value in data["address"].items() if value is not None}
        return cls(id=str(document["_id"]), **data)


class RegistrationResponse(BaseModel):
    """Returned on successful registration"""
    message: str
    userId: str


class MessageResponse(BaseModel):
    """Error and info bodies"""
    message: str
