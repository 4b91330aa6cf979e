"""
Module: conftest.py
Description: Shared pytest fixtures for SQS handler tests.

Provides a stubbed boto3 SQS client for fast unit tests and a moto
backed queue for end-to-end checks against the real boto3 client.
"""

import pytest
import boto3
from unittest.mock import MagicMock
from moto import mock_aws

from sqs_handler.handlers.queue_handler import QueueHandler
from sqs_handler.models.config import HandlerConfig
from sqs_handler.models.message import Message

TEST_REGION = "us-east-1"
TEST_QUEUE_URL = "https://sqs.us-east-1.amazonaws.com/123456789012/test-queue"


def ok_response(**payload):
    """Build a successful boto3-style response."""
    return {"ResponseMetadata": {"HTTPStatusCode": 200}, **payload}


@pytest.fixture
def sqs_client():
    """
    Provide a stub SQS client returning successful responses.

    Individual tests override return_value/side_effect as needed.
    """
    client = MagicMock()
    client.send_message.return_value = ok_response(MessageId="msg-0001")
    client.send_message_batch.return_value = ok_response(Successful=[], Failed=[])
    client.receive_message.return_value = ok_response(
        Messages=[{"MessageId": "msg-0001", "ReceiptHandle": "rh-0001", "Body": "hello"}]
    )
    client.delete_message_batch.return_value = ok_response(Successful=[], Failed=[])
    client.get_queue_attributes.return_value = ok_response(
        Attributes={"ApproximateNumberOfMessages": "7"}
    )
    return client


@pytest.fixture
def client_factory(sqs_client):
    """Client factory that always hands out the stub client."""
    return MagicMock(return_value=sqs_client)


@pytest.fixture
def handler_config():
    return HandlerConfig(region=TEST_REGION, endpoint=TEST_QUEUE_URL)


@pytest.fixture
def handler(handler_config, client_factory):
    """
    Provide a QueueHandler wired to the stub client.

    The background pool is drained on teardown.
    """
    queue_handler = QueueHandler(handler_config, client_factory=client_factory)
    yield queue_handler
    queue_handler.close()


@pytest.fixture
def make_messages():
    """Factory for lists of valid messages with bodies '0', '1', ..."""
    def _make(count):
        return [Message(body=str(i)) for i in range(count)]
    return _make


@pytest.fixture
def aws_credentials(monkeypatch):
    """Fake credentials so boto3 never reaches for real ones."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", TEST_REGION)


@pytest.fixture
def mock_sqs(aws_credentials):
    """Run the test inside moto's AWS mock and yield a raw boto3 SQS client."""
    with mock_aws():
        yield boto3.client("sqs", region_name=TEST_REGION)


@pytest.fixture
def queue_url(mock_sqs):
    """Create a standard mock queue."""
    return mock_sqs.create_queue(QueueName="test-queue")["QueueUrl"]


@pytest.fixture
def fifo_queue_url(mock_sqs):
    """Create a FIFO mock queue."""
    return mock_sqs.create_queue(
        QueueName="test-queue.fifo",
        Attributes={"FifoQueue": "true"}
    )["QueueUrl"]
