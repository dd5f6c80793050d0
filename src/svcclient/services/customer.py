from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict

from svcclient.config import ClientConfig
from svcclient.core.http.transport import HttpService

from .base import ErrorHook, ServiceClient

DEFAULT_BASE_PATH = "/api/v1/customers"


class CustomerResource(BaseModel):
    model_config = ConfigDict(extra="allow")

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


CustomerPayload = Union[CustomerResource, Mapping[str, Any]]


class CustomerService(ServiceClient):
    def __init__(self, transport: HttpService, config: ClientConfig, error_hook: ErrorHook | None = None) -> None:
        super().__init__(
            transport,
            config,
            name="CustomerService",
            base_path=DEFAULT_BASE_PATH,
            config_key="customer_service_uri",
            error_hook=error_hook,
        )

    def create_customer(self, data: CustomerPayload) -> Any:
        self.set_client_credentials_auth()
        return self.post("", data)

    def update_customer(self, customer_id: int | str, data: CustomerPayload) -> Any:
        self.set_client_credentials_auth()
        return self.post(f"/update/{customer_id}", data)
