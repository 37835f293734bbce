"""Content record model.

A record is one scheduled or published video with its platform links and
the legal case it covers. Attribute names are snake_case; the display
style keys used in the JSON file ("Post Title", "SCOTUS Docket no.", ...)
are kept as aliases so the file format never changes.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr
from pydantic import ValidationError as PydanticValidationError

from ondocket.constants import (
    CONTENT_TYPE_PRIMARY,
    FIELD_CASE,
    FIELD_DESCRIPTION,
    FIELD_DOCKET,
    FIELD_DURATION,
    FIELD_FILE_NAME,
    FIELD_POST_TITLE,
    FIELD_PUBLICATION_DATE,
    FIELD_TIKTOK,
    FIELD_TYPE,
    FIELD_X,
    FIELD_YOUTUBE,
)
from ondocket.exceptions import ValidationException


def _is_plain_value(value):
    return value is None or (isinstance(value, (str, int, float)) and not isinstance(value, bool))


class ContentRecord(BaseModel):
    """One entry of the collection. Every field is an optional string."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="allow",
        coerce_numbers_to_str=True,
    )

    file_name: Optional[str] = Field(default=None, alias=FIELD_FILE_NAME)
    post_title: Optional[str] = Field(default=None, alias=FIELD_POST_TITLE)
    description: Optional[str] = Field(default=None, alias=FIELD_DESCRIPTION)
    publication_date: Optional[str] = Field(default=None, alias=FIELD_PUBLICATION_DATE)
    duration: Optional[str] = Field(default=None, alias=FIELD_DURATION)
    youtube: Optional[str] = Field(default=None, alias=FIELD_YOUTUBE)
    tiktok: Optional[str] = Field(default=None, alias=FIELD_TIKTOK)
    x_com: Optional[str] = Field(default=None, alias=FIELD_X)
    type: Optional[str] = Field(default=None, alias=FIELD_TYPE)
    case: Optional[str] = Field(default=None, alias=FIELD_CASE)
    scotus_docket_no: Optional[str] = Field(default=None, alias=FIELD_DOCKET)

    # Set on elements read back from the file that from_payload rejects
    _stored: Any = PrivateAttr(default=None)
    _keep_stored: bool = PrivateAttr(default=False)

    @classmethod
    def from_payload(cls, payload):
        """Build a record from a decoded JSON object.

        Raises ValidationException when the payload is not an object or a
        known field holds a value that is neither a string, a number nor null.
        """
        if not isinstance(payload, dict):
            raise ValidationException("Record must be a JSON object")
        try:
            return cls.model_validate(payload)
        except PydanticValidationError as e:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
            raise ValidationException(f"Invalid record fields: {fields}") from e

    @classmethod
    def from_stored(cls, item):
        """Lenient view of a stored element that from_payload rejects.

        Known fields holding anything other than a string, a number or null
        read as None. to_payload returns the element exactly as stored, so
        it survives rewrites of the collection unchanged.
        """
        if isinstance(item, dict):
            known = set(cls.model_fields) | {field.alias for field in cls.model_fields.values()}
            record = cls.model_validate({
                key: value for key, value in item.items()
                if key not in known or _is_plain_value(value)
            })
        else:
            record = cls()
        record._stored = item
        record._keep_stored = True
        return record

    def to_payload(self):
        """Serialize with the display-style keys, keeping only keys that were supplied."""
        if self._keep_stored:
            return self._stored
        return self.model_dump(by_alias=True, exclude_unset=True)

    @property
    def is_primary(self):
        return (self.type or "").lower() == CONTENT_TYPE_PRIMARY.lower()

    @property
    def has_platform_links(self):
        return bool(self.youtube or self.tiktok or self.x_com)
