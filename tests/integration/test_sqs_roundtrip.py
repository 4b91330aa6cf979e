"""
Module: test_sqs_roundtrip.py
Description: End-to-end tests against moto's SQS mock.

Exercises QueueHandler with the real boto3 client built by
build_client(), so request shapes are checked by botocore's
parameter validation and moto's SQS backend.
"""

import pytest

from sqs_handler.handlers.queue_handler import QueueHandler
from sqs_handler.models.config import HandlerConfig
from sqs_handler.models.message import Message

from conftest import TEST_REGION


@pytest.fixture
def moto_handler(queue_url):
    """Provide a QueueHandler pointed at the mock queue."""
    handler = QueueHandler(HandlerConfig(region=TEST_REGION))
    handler.set_credentials("testing", "testing")
    handler.set_endpoint(queue_url)
    yield handler
    handler.close()


def receive_all(handler, limit=10):
    response = handler.receive_message({
        "MaxNumberOfMessages": limit,
        "MessageAttributeNames": ["All"],
    })
    return response.get("Messages", [])


class TestSqsRoundtrip:
    """Test cases running through boto3 and moto."""

    def test_send_and_receive(self, moto_handler):
        message = Message(
            body="hello",
            message_attributes={"Source": {"DataType": "String", "StringValue": "tests"}}
        )

        assert moto_handler.send_message(message) is True

        received = receive_all(moto_handler)
        assert len(received) == 1
        assert received[0]["Body"] == "hello"
        assert received[0]["MessageAttributes"]["Source"]["StringValue"] == "tests"

    def test_send_with_explicit_zero_delay(self, moto_handler):
        assert moto_handler.send_message(Message(body="now", delay_seconds=0)) is True
        assert receive_all(moto_handler)[0]["Body"] == "now"

    def test_send_batch_and_count(self, moto_handler):
        messages = [Message(body=f"job-{i}") for i in range(12)]

        assert moto_handler.send_batch(messages) == 12
        assert moto_handler.get_total_messages_amount() == 12

    def test_send_batch_skips_invalid(self, moto_handler):
        messages = [Message(body="a"), Message(), Message(body="b")]

        assert moto_handler.send_batch(messages) == 2
        assert moto_handler.get_total_messages_amount() == 2

    def test_send_batch_fifo(self, moto_handler, fifo_queue_url):
        moto_handler.set_endpoint(fifo_queue_url)
        messages = [
            Message(body=f"order-{i}", group_id="orders", deduplication_id=f"order-{i}")
            for i in range(3)
        ]

        assert moto_handler.send_batch(messages) == 3
        assert moto_handler.get_total_messages_amount() == 3

    def test_receive_and_delete(self, moto_handler):
        moto_handler.send_batch([Message(body=str(i)) for i in range(3)])
        received = receive_all(moto_handler)

        entries = [
            {"Id": str(i), "ReceiptHandle": m["ReceiptHandle"]}
            for i, m in enumerate(received)
        ]

        assert moto_handler.delete_message_batch({"Entries": entries}) is True
        assert receive_all(moto_handler) == []

    def test_delete_async(self, moto_handler):
        moto_handler.send_message(Message(body="bye"))
        received = receive_all(moto_handler)

        assert moto_handler.delete_message_batch_async({
            "Entries": [{"Id": "0", "ReceiptHandle": received[0]["ReceiptHandle"]}]
        }) is True
        moto_handler.close()

        assert moto_handler.get_queue_attributes(
            ["ApproximateNumberOfMessagesNotVisible"]
        )["ApproximateNumberOfMessagesNotVisible"] == "0"

    def test_send_async(self, moto_handler):
        assert moto_handler.send_message_async(Message(body="later")) is True
        moto_handler.close()

        assert moto_handler.get_total_messages_amount() == 1

    def test_empty_queue(self, moto_handler):
        assert moto_handler.get_total_messages_amount() == 0
        assert receive_all(moto_handler) == []
        assert moto_handler.last_error is None

    def test_missing_queue_is_reported(self, moto_handler, queue_url):
        missing = queue_url.replace("test-queue", "missing-queue")

        assert moto_handler.receive_message({"QueueUrl": missing}) == {}
        assert moto_handler.last_error is not None
        assert moto_handler.last_error.operation == "ReceiveMessage"

    def test_parameter_errors_are_contained(self, moto_handler):
        assert moto_handler.delete_message_batch({"Entries": "not-a-list"}) is False
        assert moto_handler.last_error.error_code == "ParamValidationError"

    def test_queue_attributes(self, moto_handler):
        attributes = moto_handler.get_queue_attributes()

        assert "QueueArn" in attributes
        assert attributes["ApproximateNumberOfMessages"] == "0"
