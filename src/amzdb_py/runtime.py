from __future__ import annotations

import os
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from botocore.config import Config


@dataclass(frozen=True)
class AwsCallMetric:
    service: str
    operation: str
    seconds: float
    ok: bool


@dataclass(frozen=True)
class ClientSettings:
    region: str | None = None
    endpoint_url: str | None = None
    connect_timeout: float = 1.0
    read_timeout: float = 3.0

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] = os.environ) -> ClientSettings:
        return cls(
            region=environ.get("AWS_REGION") or environ.get("AWS_DEFAULT_REGION") or None,
            endpoint_url=environ.get("DYNAMODB_ENDPOINT") or None,
        )

    def boto3_config(self) -> Config:
        return create_boto3_config(connect_timeout=self.connect_timeout, read_timeout=self.read_timeout)


def create_boto3_config(
    *,
    connect_timeout: float = 1.0,
    read_timeout: float = 3.0,
    max_attempts: int = 3,
) -> Config:
    return Config(
        connect_timeout=connect_timeout,
        read_timeout=read_timeout,
        retries={"max_attempts": max_attempts, "mode": "standard"},
    )


def endpoint_for_region(region: str) -> str:
    if not region:
        raise ValueError("region is required")
    if region.startswith("cn-"):
        return f"https://dynamodb.{region}.amazonaws.com.cn"
    return f"https://dynamodb.{region}.amazonaws.com"


class _InstrumentedTransport:
    def __init__(self, transport: Any, service: str, on_call: Callable[[AwsCallMetric], None]) -> None:
        self._transport = transport
        self._service = service
        self._on_call = on_call

    def send(self, operation: str, payload: Mapping[str, Any]) -> bytes:
        start = time.monotonic()
        try:
            out = self._transport.send(operation, payload)
        except Exception:
            self._on_call(
                AwsCallMetric(
                    service=self._service,
                    operation=operation,
                    seconds=time.monotonic() - start,
                    ok=False,
                )
            )
            raise

        self._on_call(
            AwsCallMetric(
                service=self._service,
                operation=operation,
                seconds=time.monotonic() - start,
                ok=True,
            )
        )
        return out


def instrument_transport(
    transport: Any,
    *,
    on_call: Callable[[AwsCallMetric], None],
    service: str = "dynamodb",
) -> Any:
    return _InstrumentedTransport(transport, service, on_call)
