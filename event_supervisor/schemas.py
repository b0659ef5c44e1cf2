from decimal import Decimal
from enum import Enum
from typing import Any, Dict, NamedTuple, Optional, Union

from boto3.dynamodb.types import TypeDeserializer
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import RecordValidationError

_deserializer = TypeDeserializer()


class AspectType(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class GroupKey(NamedTuple):
    """All events about the same object for the same owner"""
    object_id: int
    owner_id: int

    def __str__(self) -> str:
        return f"{self.object_id}-{self.owner_id}"


class EventRecord(BaseModel):
    """One raw webhook event as stored in the raw webhook table"""
    model_config = ConfigDict(frozen=True)

    object_id: int
    owner_id: int
    aspect_type: AspectType
    archive_id: Optional[str] = None
    # Stored as whatever marker the intake service writes ("false", "pending", a BOOL)
    fetched: Optional[Union[bool, str]] = None
    raw: Dict[str, Any] = Field(default_factory=dict, exclude=True, repr=False)

    @field_validator('object_id', 'owner_id', mode='before')
    @classmethod
    def _integral(cls, value: Any) -> Any:
        # DynamoDB numbers deserialize to Decimal
        if isinstance(value, Decimal):
            if value != value.to_integral_value():
                raise ValueError(f"expected an integer identifier, got {value}")
            return int(value)
        return value

    @property
    def group_key(self) -> GroupKey:
        return GroupKey(self.object_id, self.owner_id)

    @property
    def is_delete(self) -> bool:
        return self.aspect_type == AspectType.DELETE

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "EventRecord":
        """
        Build an event record from a low-level DynamoDB item.

        Args:
            item: Item in attribute-value form, e.g. {"object_id": {"N": "1"}}

        Returns:
            The parsed EventRecord

        Raises:
            RecordValidationError: If the item is missing a required field or
                a field has the wrong type
        """
        try:
            values = {name: _deserializer.deserialize(value) for name, value in item.items()}
        except (TypeError, ValueError, AttributeError, ArithmeticError) as e:
            raise RecordValidationError(f"Undecodable item attributes: {e}", item) from e

        try:
            return cls(
                object_id=values.get('object_id'),
                owner_id=values.get('owner_id'),
                aspect_type=values.get('aspect_type'),
                archive_id=values.get('archive_id'),
                fetched=values.get('fetched'),
                raw=item,
            )
        except ValidationError as e:
            fields = ", ".join(".".join(str(p) for p in err['loc']) for err in e.errors())
            raise RecordValidationError(f"Invalid event record ({fields})", item) from e


class CanonicalNotification(BaseModel):
    """The single message enqueued for one group of event records"""
    owner_id: int
    object_id: int
    archive_id: Optional[str] = None
    aspect_type: AspectType

    @classmethod
    def from_record(cls, record: EventRecord, aspect_type: Optional[AspectType] = None) -> "CanonicalNotification":
        return cls(
            owner_id=record.owner_id,
            object_id=record.object_id,
            archive_id=record.archive_id,
            aspect_type=aspect_type or record.aspect_type,
        )

    @property
    def group_key(self) -> GroupKey:
        return GroupKey(self.object_id, self.owner_id)

    def to_message_body(self) -> str:
        return self.model_dump_json()


class RunSummary(BaseModel):
    """Counters collected over one run, logged when the run ends"""
    pages: int = 0
    records: int = 0
    rejected: int = 0
    groups: int = 0
    sent: int = 0
    marked_fetched: int = 0


class JobResult(BaseModel):
    """HTTP-like outcome returned to the invoking framework"""
    statusCode: int
    body: str

    @classmethod
    def success(cls) -> "JobResult":
        return cls(statusCode=200, body="Process completed successfully")

    @classmethod
    def failure(cls) -> "JobResult":
        return cls(statusCode=500, body="Internal Server Error")

    @property
    def ok(self) -> bool:
        return self.statusCode == 200

    def as_response(self) -> Dict[str, Any]:
        return self.model_dump()
