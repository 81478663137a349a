"""Persistence for registered users on top of a pymongo collection"""
import logging
from datetime import datetime, timezone
from typing import List, Optional, Union

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import ValidationError
from pymongo import ASCENDING, DESCENDING
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError as MongoDuplicateKeyError, PyMongoError

from user_registry.errors import DuplicateKeyError, NotFoundError, StoreUnavailableError, UserValidationError
from user_registry.models.user_models import Address, RegistrationRequest, UserDocument, UserPublic
from user_registry.security import hash_password
from user_registry.utils import time_function

logger = logging.getLogger(__name__)

UNIQUE_FIELDS = ("emailId", "loginId")
SAFE_PROJECTION = {"password": 0}

DUPLICATE_MESSAGES = {
    "emailId": "Email already exists",
    "loginId": "Login ID already exists",
}
GENERIC_DUPLICATE_MESSAGE = "Email or Login ID already exists"


def _duplicate_field(error: MongoDuplicateKeyError) -> Optional[str]:
    """Work out which unique index was hit, None if the server did not say"""
    details = error.details or {}
    key_pattern = details.get("keyPattern") or details.get("keyValue") or {}
    for field in UNIQUE_FIELDS:
        if field in key_pattern:
            return field
    # older servers only report the index name in errmsg
    errmsg = details.get("errmsg") or str(error)
    for field in UNIQUE_FIELDS:
        if f"{field}_1" in errmsg:
            return field
    return None


def _validation_message(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    return f"{location}: {first['msg']}" if location else first["msg"]


class UserStore:
    """
    Create and read user records.
    Uniqueness of emailId and loginId is enforced by the collection's indexes,
    so concurrent duplicate registrations lose with DuplicateKeyError.
    """
    def __init__(self, collection: Collection, bcrypt_rounds: int = 12):
        self.collection = collection
        self.bcrypt_rounds = bcrypt_rounds
        # inserts are refused until the unique indexes are known to exist
        self.indexes_ready = False

    def ensure_indexes(self) -> None:
        """Create the unique indexes, safe to call repeatedly"""
        try:
            for field in UNIQUE_FIELDS:
                self.collection.create_index([(field, ASCENDING)], unique=True, name=f"{field}_1")
            self.collection.create_index([("createdAt", DESCENDING)], name="createdAt_-1")
        except PyMongoError as e:
            raise StoreUnavailableError("Could not create user indexes") from e
        self.indexes_ready = True
        logger.info("User indexes ensured on %s", self.collection.name)

    @time_function("create_user")
    def create_user(self, fields: Union[RegistrationRequest, dict]) -> str:
        """Persist a new user and return its id"""
        if isinstance(fields, dict):
            fields = RegistrationRequest.model_validate(fields)

        now = datetime.now(timezone.utc)
        address = fields.address.model_dump(exclude_none=True) if fields.address else {}
        try:
            record = UserDocument(
                firstName=fields.firstName,
                lastName=fields.lastName,
                mobileNo=fields.mobileNo,
                emailId=fields.emailId,
                address=Address(**address),
                loginId=fields.loginId,
                password=fields.password,
                createdAt=now,
                updatedAt=now,
            )
        except ValidationError as e:
            raise UserValidationError(_validation_message(e)) from e

        if not self.indexes_ready:
            # database was unreachable at startup, retry before the first insert
            self.ensure_indexes()

        document = record.model_dump()
        document["password"] = hash_password(record.password, rounds=self.bcrypt_rounds)

        try:
            result = self.collection.insert_one(document)
        except MongoDuplicateKeyError as e:
            field = _duplicate_field(e)
            logger.info("Duplicate registration rejected on %s", field or "unknown index")
            raise DuplicateKeyError(DUPLICATE_MESSAGES.get(field, GENERIC_DUPLICATE_MESSAGE), field=field) from e
        except PyMongoError as e:
            logger.exception("Failed to insert user")
            raise StoreUnavailableError("Could not save user") from e

        user_id = str(result.inserted_id)
        logger.info("User registered: %s", user_id)
        return user_id

    @time_function("list_users")
    def list_users(self, newest_first: bool = True) -> List[UserPublic]:
        """All users in safe projection, ordered by creation time"""
        direction = DESCENDING if newest_first else ASCENDING
        try:
            cursor = self.collection.find({}, SAFE_PROJECTION).sort("createdAt", direction)
            return [UserPublic.from_document(document) for document in cursor]
        except PyMongoError as e:
            logger.exception("Failed to list users")
            raise StoreUnavailableError("Could not load users") from e
        except ValidationError as e:
            logger.exception("Stored user record is unreadable")
            raise StoreUnavailableError("Could not load users") from e

    def find_user_by_email(self, email: str) -> UserPublic:
        """Single user by emailId, raises NotFoundError on a miss"""
        return self._find_one({"emailId": email})

    def find_user_by_id(self, user_id: str) -> UserPublic:
        """Single user by record id, malformed ids count as a miss"""
        try:
            object_id = ObjectId(user_id)
        except (InvalidId, TypeError) as e:
            raise NotFoundError("User not found") from e
        return self._find_one({"_id": object_id})

    def _find_one(self, query: dict) -> UserPublic:
        try:
            document = self.collection.find_one(query, SAFE_PROJECTION)
        except PyMongoError as e:
            logger.exception("Failed to look up user")
            raise StoreUnavailableError("Could not load user") from e
        if document is None:
            raise NotFoundError("User not found")
        try:
            return UserPublic.from_document(document)
        except ValidationError as e:
            logger.exception("Stored user record is unreadable")
            raise StoreUnavailableError("Could not load user") from e
