from .base import ErrorHook, ServiceClient
from .customer import CustomerResource, CustomerService

__all__ = ["ServiceClient", "ErrorHook", "CustomerService", "CustomerResource"]
