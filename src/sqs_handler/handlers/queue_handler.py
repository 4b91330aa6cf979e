"""
Module: queue_handler.py
Description: SQS operations behind a reconfigurable handler.

QueueHandler owns one boto3 SQS client built from an immutable
HandlerConfig. Every setter derives a new configuration and rebuilds the
client right away, so no operation can observe a partially configured
client.

Transport failures never leave the handler: botocore exceptions and
non-200 responses are logged under the "sqs" category and turned into
False, {} or a partial count. The last synchronous failure is kept on
``last_error`` for callers that need to tell "failed" from "empty".

Key Components:
- QueueHandler: send, batch send, receive, batch delete, queue attributes
- SendMode: Selects a blocking call or a fire-and-forget submission

Dependencies: boto3, botocore, pydantic, structlog
Author: SQS Handler Team
"""

import uuid
from concurrent.futures import Future, ThreadPoolExecutor
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from botocore.exceptions import ClientError

from ..config.settings import Settings
from ..models.config import Credentials, HandlerConfig, build_client
from ..models.message import Message, SCENARIO_BATCH, SCENARIO_SINGLE
from ..models.result import OperationResult
from ..utils.batch_helpers import SQS_MAX_BATCH_SIZE, chunk_list
from ..utils.logger import get_logger

logger = get_logger(__name__)

OP_SEND_MESSAGE = "SendMessage"
OP_SEND_MESSAGE_BATCH = "SendMessageBatch"
OP_RECEIVE_MESSAGE = "ReceiveMessage"
OP_DELETE_MESSAGE_BATCH = "DeleteMessageBatch"
OP_GET_QUEUE_ATTRIBUTES = "GetQueueAttributes"

APPROXIMATE_NUMBER_OF_MESSAGES = "ApproximateNumberOfMessages"


class SendMode(Enum):
    """How a request is handed to the transport."""

    SYNC = "sync"
    FIRE_AND_FORGET = "fire_and_forget"


class QueueHandler:
    """
    Facade over a boto3 SQS client.

    Attributes:
        last_error: Failure of the latest synchronous transport call made
            by a public method, or None if it succeeded

    Example:
        >>> handler = QueueHandler(HandlerConfig(region="us-east-1"))
        >>> handler.set_endpoint("https://sqs.us-east-1.amazonaws.com/123456789012/jobs")
        >>> handler.send_message(Message(body="hello"))
        True
        >>> handler.send_batch([Message(body=str(i)) for i in range(12)])
        12
    """

    def __init__(
        self,
        config: Optional[HandlerConfig] = None,
        client_factory: Callable[[HandlerConfig], Any] = build_client,
        executor: Optional[ThreadPoolExecutor] = None,
        max_workers: int = 4
    ):
        """
        Initialize the handler and build its client.

        Args:
            config: Initial configuration; defaults to HandlerConfig()
            client_factory: Builds a client from a configuration
            executor: Pool for fire-and-forget calls; created lazily if None
            max_workers: Pool size when the handler creates its own pool

        Raises:
            ValueError: If config is not a HandlerConfig
        """
        if config is not None and not isinstance(config, HandlerConfig):
            raise ValueError("config must be a HandlerConfig instance")

        self._config = config or HandlerConfig()
        self._client_factory = client_factory
        self._executor = executor
        self._owns_executor = executor is None
        self._max_workers = max_workers
        self.last_error: Optional[OperationResult] = None

        self._client = self._client_factory(self._config)

        self._dispatch = {
            SendMode.SYNC: self._invoke,
            SendMode.FIRE_AND_FORGET: self._submit,
        }

        logger.info(
            "SQS handler initialized",
            region=self._config.region,
            endpoint=self._config.endpoint,
            version=self._config.version
        )

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> 'QueueHandler':
        """
        Build a handler from environment-backed settings.

        Args:
            settings: Loaded Settings instance
            **kwargs: Extra QueueHandler constructor arguments

        Returns:
            Configured QueueHandler
        """
        credentials = None
        if settings.access_key_id and settings.secret_access_key:
            credentials = Credentials(
                key=settings.access_key_id,
                secret=settings.secret_access_key,
                token=settings.session_token
            )

        config = HandlerConfig(
            version=settings.version,
            credentials=credentials,
            region=settings.region,
            endpoint=settings.endpoint,
            timeout=settings.timeout,
            service_url=settings.service_url
        )
        kwargs.setdefault("max_workers", settings.async_workers)
        return cls(config, **kwargs)

    @property
    def config(self) -> HandlerConfig:
        return self._config

    @property
    def client(self):
        return self._client

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def set_endpoint(self, endpoint: str) -> None:
        self._reconfigure(endpoint=endpoint)

    def set_region(self, region: str) -> None:
        self._reconfigure(region=region)

    def set_version(self, version: str) -> None:
        self._reconfigure(version=version)

    def set_timeout(self, timeout: float) -> None:
        self._reconfigure(timeout=timeout)

    def set_credentials(self, key: str, secret: str, token: Optional[str] = None) -> None:
        """
        Replace the static credentials.

        Args:
            key: AWS access key id
            secret: AWS secret access key
            token: Optional session token
        """
        self._reconfigure(credentials=Credentials(key=key, secret=secret, token=token))

    def _reconfigure(self, **changes: Any) -> None:
        self._config = self._config.with_changes(**changes)
        if self._client is not None:
            self._client = self._client_factory(self._config)
            logger.debug(
                "SQS client rebuilt",
                changed=sorted(changes),
                region=self._config.region,
                endpoint=self._config.endpoint
            )

    # ------------------------------------------------------------------
    # Sending
    # ------------------------------------------------------------------

    def send_message(self, message: Message) -> bool:
        """Send one message and wait for the response."""
        return self.send(message, SendMode.SYNC)

    def send_message_async(self, message: Message) -> bool:
        """Queue one message for sending in the background."""
        return self.send(message, SendMode.FIRE_AND_FORGET)

    def send(self, message: Message, mode: SendMode = SendMode.SYNC) -> bool:
        """
        Validate and send a single message.

        A message without a queue URL is sent to the configured endpoint.

        Args:
            message: Message to send
            mode: SYNC waits for HTTP 200; FIRE_AND_FORGET returns once
                the request is handed to the background pool

        Returns:
            True if sent (or submitted), False otherwise

        Raises:
            ValueError: If message is not a Message instance or mode
                is not a SendMode
        """
        if not isinstance(message, Message):
            raise ValueError("message must be a Message instance")
        if not isinstance(mode, SendMode):
            raise ValueError("mode must be a SendMode")

        self.last_error = None

        if not message.queue_url and self._config.endpoint:
            message.queue_url = self._config.endpoint

        if not message.validate_scenario(SCENARIO_SINGLE):
            logger.error(
                "SQS message failed validation",
                operation=OP_SEND_MESSAGE,
                errors=message.errors
            )
            return False

        return self._dispatch[mode](
            OP_SEND_MESSAGE,
            self._client.send_message,
            **message.attributes()
        )

    def send_batch(self, messages: List[Message]) -> Optional[int]:
        """
        Send messages to the configured endpoint in batches of 10.

        Each message is switched to the "batch" scenario and validated in
        place; invalid ones are logged and skipped. Chunks are sent in
        order and sending stops at the first failed chunk.

        Args:
            messages: Messages to send

        Returns:
            Number of messages in chunks acknowledged before the first
            failure, 0 if nothing passed validation, or None when no
            endpoint is configured

        Raises:
            ValueError: If messages is not a list of Message instances
        """
        if not isinstance(messages, list):
            raise ValueError("messages must be a list")
        if not all(isinstance(message, Message) for message in messages):
            raise ValueError("messages must contain only Message instances")

        self.last_error = None

        endpoint = self._config.endpoint
        if not endpoint:
            return self._missing_endpoint(OP_SEND_MESSAGE_BATCH)

        entries = []
        for message in messages:
            if not message.validate_scenario(SCENARIO_BATCH):
                logger.error(
                    "SQS message failed validation",
                    operation=OP_SEND_MESSAGE_BATCH,
                    errors=message.errors
                )
                continue
            entries.append({"Id": uuid.uuid4().hex, **message.attributes()})

        if not entries:
            return 0

        count = 0
        for chunk in chunk_list(entries, SQS_MAX_BATCH_SIZE):
            result = self._call(
                OP_SEND_MESSAGE_BATCH,
                self._client.send_message_batch,
                QueueUrl=endpoint,
                Entries=chunk
            )
            if not result.ok:
                self.last_error = result
                logger.error(
                    "SQS batch send stopped",
                    operation=OP_SEND_MESSAGE_BATCH,
                    sent=count,
                    not_sent=len(entries) - count
                )
                return count

            failed = result.payload.get("Failed", [])
            if failed:
                logger.warning(
                    "SQS rejected batch entries",
                    operation=OP_SEND_MESSAGE_BATCH,
                    failed=[
                        {"id": f.get("Id"), "code": f.get("Code"), "message": f.get("Message")}
                        for f in failed
                    ]
                )
            count += len(chunk)

        logger.info("Sent to SQS", operation=OP_SEND_MESSAGE_BATCH, count=count)
        return count

    # ------------------------------------------------------------------
    # Receiving and deleting
    # ------------------------------------------------------------------

    def receive_message(self, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Receive messages.

        Args:
            params: ReceiveMessage parameters; QueueUrl defaults to the
                configured endpoint

        Returns:
            ReceiveMessage response, or {} on failure
        """
        params = self._with_queue_url(OP_RECEIVE_MESSAGE, params)
        if params is None:
            return {}

        result = self._call(OP_RECEIVE_MESSAGE, self._client.receive_message, **params)
        if not result.ok:
            self.last_error = result
            return {}
        return result.payload

    def delete_message_batch(self, params: Dict[str, Any]) -> bool:
        """Delete up to 10 messages by receipt handle and wait for the response."""
        return self._delete_message_batch(params, SendMode.SYNC)

    def delete_message_batch_async(self, params: Dict[str, Any]) -> bool:
        """Queue a DeleteMessageBatch call in the background."""
        return self._delete_message_batch(params, SendMode.FIRE_AND_FORGET)

    def _delete_message_batch(self, params: Dict[str, Any], mode: SendMode) -> bool:
        params = self._with_queue_url(OP_DELETE_MESSAGE_BATCH, params)
        if params is None:
            return False

        return self._dispatch[mode](
            OP_DELETE_MESSAGE_BATCH,
            self._client.delete_message_batch,
            **params
        )

    # ------------------------------------------------------------------
    # Queue attributes
    # ------------------------------------------------------------------

    def get_queue_attributes(
        self,
        attribute_names: Optional[List[str]] = None,
        queue_url: Optional[str] = None
    ) -> Dict[str, str]:
        """
        Read queue attributes.

        Args:
            attribute_names: Attributes to fetch; defaults to ["All"]
            queue_url: Queue to inspect; defaults to the configured endpoint

        Returns:
            Attributes mapping from the response, or {} on failure
        """
        params = self._with_queue_url(
            OP_GET_QUEUE_ATTRIBUTES,
            {"QueueUrl": queue_url, "AttributeNames": attribute_names or ["All"]}
        )
        if params is None:
            return {}

        result = self._call(OP_GET_QUEUE_ATTRIBUTES, self._client.get_queue_attributes, **params)
        if not result.ok:
            self.last_error = result
            return {}
        return result.payload.get("Attributes", {})

    def get_total_messages_amount(self) -> int:
        """
        Approximate number of messages available in the queue.

        Returns:
            Reported count, or 0 when SQS did not return it
        """
        attributes = self.get_queue_attributes([APPROXIMATE_NUMBER_OF_MESSAGES])
        value = attributes.get(APPROXIMATE_NUMBER_OF_MESSAGES)
        if value is None:
            return 0
        return int(value)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self, wait: bool = True) -> None:
        """Shut down the background pool if the handler created it."""
        if self._executor is not None and self._owns_executor:
            self._executor.shutdown(wait=wait)
            self._executor = None

    def __enter__(self) -> 'QueueHandler':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _with_queue_url(
        self,
        operation: str,
        params: Optional[Dict[str, Any]]
    ) -> Optional[Dict[str, Any]]:
        """Copy params, filling QueueUrl from the endpoint. None if neither is set."""
        self.last_error = None

        params = dict(params or {})
        if not params.get("QueueUrl"):
            params["QueueUrl"] = self._config.endpoint

        if not params["QueueUrl"]:
            return self._missing_endpoint(operation)
        return params

    def _missing_endpoint(self, operation: str) -> None:
        self.last_error = OperationResult.failure(
            operation,
            error_code="MissingEndpoint",
            error_message="No endpoint set"
        )
        logger.error("No endpoint set", operation=operation)
        return None

    def _invoke(self, operation: str, method: Callable, **params: Any) -> bool:
        result = self._call(operation, method, **params)
        if not result.ok:
            self.last_error = result
        return result.ok

    def _submit(self, operation: str, method: Callable, **params: Any) -> bool:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self._max_workers,
                thread_name_prefix="sqs-handler"
            )

        try:
            future = self._executor.submit(self._call, operation, method, **params)
        except RuntimeError as e:
            logger.error(
                "SQS background request rejected",
                operation=operation,
                error_code=type(e).__name__,
                error_message=str(e)
            )
            return False

        future.add_done_callback(
            lambda f: self._log_background_exception(operation, f)
        )
        return True

    @staticmethod
    def _log_background_exception(operation: str, future: Future) -> None:
        error = future.exception()
        if error is not None:
            logger.error(
                "SQS background request crashed",
                operation=operation,
                error_code=type(error).__name__,
                error_message=str(error),
                exc_info=error
            )

    def _call(self, operation: str, method: Callable, **params: Any) -> OperationResult:
        """
        Run one SQS API call and convert the outcome.

        Args:
            operation: SQS operation name used in logs and results
            method: Bound boto3 client method
            **params: Request parameters

        Returns:
            OperationResult; never raises botocore exceptions
        """
        try:
            response = method(**params)

        except ClientError as e:
            error = e.response.get("Error", {})
            result = OperationResult.failure(
                operation,
                error_code=error.get("Code", "Unknown"),
                error_message=error.get("Message", str(e)),
                status_code=e.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
            )
            logger.error(
                "SQS request failed",
                operation=operation,
                error_code=result.error_code,
                error_message=result.error_message,
                exc_info=True
            )
            return result

        except Exception as e:
            # BotoCoreError and anything raised from client event hooks
            result = OperationResult.failure(
                operation,
                error_code=type(e).__name__,
                error_message=str(e)
            )
            logger.error(
                "SQS request failed",
                operation=operation,
                error_code=result.error_code,
                error_message=result.error_message,
                exc_info=True
            )
            return result

        status_code = response.get("ResponseMetadata", {}).get("HTTPStatusCode")
        if status_code != 200:
            result = OperationResult.failure(
                operation,
                error_code=f"HTTP{status_code}",
                error_message=f"Unexpected HTTP status {status_code}",
                status_code=status_code
            )
            logger.error(
                "SQS request returned non-200 status",
                operation=operation,
                error_code=result.error_code,
                error_message=result.error_message,
                status_code=status_code
            )
            return result

        return OperationResult.success(operation, response)
