"""
Module: message.py
Description: Outbound SQS message model.

Defines the Message model handed to QueueHandler for single and batch
sends. Field types are enforced by pydantic on construction and
assignment; the required-field check is deferred to validate_scenario()
because the set of required fields depends on how the message is sent.

Key Components:
- Message: One outbound message with SQS wire-name aliases
- MessageAttributeValue: Typed value of a custom message attribute
- Scenarios: "single" (SendMessage) and "batch" (SendMessageBatch entry)

Wire shape (SendMessage):
    {
        'DelaySeconds': <integer>,
        'MessageAttributes': {
            '<String>': {
                'DataType': '<string>',  # REQUIRED
                'StringValue': '<string>',
                'BinaryValue': <bytes>,
                'StringListValues': ['<string>', ...],
                'BinaryListValues': [<bytes>, ...],
            },
        },
        'MessageBody': '<string>',  # REQUIRED
        'MessageDeduplicationId': '<string>',
        'MessageGroupId': '<string>',
        'QueueUrl': '<string>',  # REQUIRED
    }

Dependencies: pydantic, typing
Author: SQS Handler Team
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator

SCENARIO_SINGLE = "single"
SCENARIO_BATCH = "batch"

# Fields checked and emitted per scenario. Batch entries get their
# destination from the SendMessageBatch envelope.
SCENARIO_FIELDS: Dict[str, List[str]] = {
    SCENARIO_SINGLE: [
        "body",
        "queue_url",
        "delay_seconds",
        "message_attributes",
        "deduplication_id",
        "group_id",
    ],
    SCENARIO_BATCH: [
        "body",
        "delay_seconds",
        "message_attributes",
        "deduplication_id",
        "group_id",
    ],
}

REQUIRED_FIELDS: Dict[str, List[str]] = {
    SCENARIO_SINGLE: ["body", "queue_url"],
    SCENARIO_BATCH: ["body"],
}

ATTRIBUTE_DATA_TYPES = ("String", "Number", "Binary")


class MessageAttributeValue(BaseModel):
    """
    Typed value of a custom SQS message attribute.

    DataType may carry a custom suffix, e.g. ``Number.int`` or
    ``String.uuid``.
    """

    model_config = ConfigDict(populate_by_name=True)

    data_type: str = Field(..., alias="DataType", min_length=1)
    string_value: Optional[str] = Field(default=None, alias="StringValue")
    binary_value: Optional[bytes] = Field(default=None, alias="BinaryValue")
    string_list_values: Optional[List[str]] = Field(default=None, alias="StringListValues")
    binary_list_values: Optional[List[bytes]] = Field(default=None, alias="BinaryListValues")

    @field_validator('data_type')
    @classmethod
    def validate_data_type(cls, v: str) -> str:
        """DataType must be String, Number or Binary, optionally suffixed."""
        if v.split(".", 1)[0] not in ATTRIBUTE_DATA_TYPES:
            raise ValueError(
                f"DataType must start with one of: {', '.join(ATTRIBUTE_DATA_TYPES)}"
            )
        return v

    @model_validator(mode='after')
    def validate_has_value(self) -> 'MessageAttributeValue':
        if (
            self.string_value is None
            and self.binary_value is None
            and not self.string_list_values
            and not self.binary_list_values
        ):
            raise ValueError("message attribute must carry a value")
        return self

    def to_wire(self) -> Dict[str, Any]:
        """Dump using SQS names, omitting unset values."""
        return self.model_dump(by_alias=True, exclude_none=True)


class Message(BaseModel):
    """
    One outbound SQS message.

    Accepts either Python field names or SQS wire names, so a dict built
    for boto3 can be passed straight in:

        >>> Message(MessageBody="hello", QueueUrl="https://sqs...")
        >>> Message(body="hello", delay_seconds=30)

    Attributes:
        body: Message body (MessageBody)
        queue_url: Destination queue URL (QueueUrl)
        delay_seconds: Delivery delay in seconds, 0-900 (DelaySeconds)
        message_attributes: Custom attributes by name (MessageAttributes)
        deduplication_id: FIFO deduplication id (MessageDeduplicationId)
        group_id: FIFO message group id (MessageGroupId)
        scenario: Validation scenario, "single" or "batch"; never sent
    """

    model_config = ConfigDict(
        populate_by_name=True,
        validate_assignment=True
    )

    body: str = Field(default="", alias="MessageBody")
    queue_url: str = Field(default="", alias="QueueUrl")
    delay_seconds: int = Field(default=0, ge=0, le=900, alias="DelaySeconds")
    message_attributes: Dict[str, MessageAttributeValue] = Field(
        default_factory=dict,
        alias="MessageAttributes"
    )
    deduplication_id: Optional[str] = Field(
        default=None,
        max_length=128,
        alias="MessageDeduplicationId"
    )
    group_id: Optional[str] = Field(default=None, max_length=128, alias="MessageGroupId")
    scenario: str = Field(
        default=SCENARIO_SINGLE,
        pattern=r"^(single|batch)$",
        exclude=True
    )

    _errors: Dict[str, List[str]] = PrivateAttr(default_factory=dict)

    @property
    def errors(self) -> Dict[str, List[str]]:
        """Field errors from the last validate_scenario() call."""
        return self._errors

    def has_errors(self) -> bool:
        return bool(self._errors)

    def add_error(self, field: str, error: str) -> None:
        self._errors.setdefault(field, []).append(error)

    def validate_scenario(self, scenario: Optional[str] = None) -> bool:
        """
        Check that the fields required by a scenario are present.

        Args:
            scenario: "single" or "batch"; defaults to self.scenario

        Returns:
            True if the message can be sent, False otherwise. Errors are
            available from ``errors`` afterwards.
        """
        if scenario is not None:
            self.scenario = scenario

        self._errors = {}
        for name in REQUIRED_FIELDS[self.scenario]:
            value = getattr(self, name)
            if not value or not value.strip():
                alias = type(self).model_fields[name].alias
                self.add_error(alias, f"{alias} cannot be blank.")

        return not self.has_errors()

    def attributes(self) -> Dict[str, Any]:
        """
        Build the SQS request mapping for the current scenario.

        Empty values (None, "", {}) are left out. DelaySeconds of 0 is
        only sent when it was set explicitly, so the queue's default
        delay applies otherwise.

        Returns:
            Mapping of SQS field name to value
        """
        result: Dict[str, Any] = {}
        for name in SCENARIO_FIELDS[self.scenario]:
            value = getattr(self, name)
            alias = type(self).model_fields[name].alias

            if name == "delay_seconds":
                if value or name in self.model_fields_set:
                    result[alias] = value
                continue

            if name == "message_attributes":
                value = {key: attr.to_wire() for key, attr in value.items()}

            if value is None or value == "" or value == {}:
                continue
            result[alias] = value

        return result
