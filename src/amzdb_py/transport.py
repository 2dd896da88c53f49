from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import boto3
from botocore.auth import SigV4Auth
from botocore.awsrequest import AWSRequest
from botocore.config import Config
from botocore.exceptions import BotoCoreError, NoCredentialsError
from botocore.httpsession import URLLib3Session

from .aws_errors import map_client_error, map_error_response
from .request import target
from .runtime import ClientSettings, endpoint_for_region

logger = logging.getLogger(__name__)

CONTENT_TYPE = "application/x-amz-json-1.0"


class Transport(Protocol):
    def send(self, operation: str, payload: Mapping[str, Any]) -> bytes: ...


class SignedTransport:
    """Posts DynamoDB JSON requests signed with SigV4.

    Credentials come from the boto3 session; retries and connection reuse are
    left to botocore's HTTP session.
    """

    def __init__(
        self,
        settings: ClientSettings | None = None,
        *,
        session: Any | None = None,
        config: Config | None = None,
        http: Any | None = None,
    ) -> None:
        self._session: Any = session or boto3.session.Session()
        settings = settings or ClientSettings.from_environ()
        region = settings.region or self._session.region_name
        if not region:
            raise ValueError("region is required (pass ClientSettings(region=...) or set AWS_REGION)")

        self.region: str = region
        self.endpoint_url = settings.endpoint_url or endpoint_for_region(region)
        config = config or settings.boto3_config()
        self._http: Any = http or URLLib3Session(
            timeout=(config.connect_timeout, config.read_timeout),
        )

    def send(self, operation: str, payload: Mapping[str, Any]) -> bytes:
        credentials = self._session.get_credentials()
        if credentials is None:
            raise map_client_error(NoCredentialsError())

        request = AWSRequest(
            method="POST",
            url=self.endpoint_url,
            data=json.dumps(payload).encode("utf-8"),
            headers={
                "Content-Type": CONTENT_TYPE,
                "X-Amz-Target": target(operation),
            },
        )
        SigV4Auth(credentials.get_frozen_credentials(), "dynamodb", self.region).add_auth(request)

        logger.debug("dynamodb %s -> %s", operation, self.endpoint_url)
        try:
            response = self._http.send(request.prepare())
        except BotoCoreError as err:
            raise map_client_error(err) from err

        body: bytes = response.content
        if response.status_code < 200 or response.status_code >= 300:
            error = map_error_response(response.status_code, body)
            logger.debug("dynamodb %s failed: %s", operation, error)
            raise error
        return body

