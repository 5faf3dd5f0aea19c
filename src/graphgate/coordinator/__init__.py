from graphgate.coordinator.coordinator_module import CoordinatorImpl, HttpTransport, create_coordinator
from graphgate.coordinator.protocol import Coordinator, Transport

__all__ = [
    "Coordinator",
    "CoordinatorImpl",
    "HttpTransport",
    "Transport",
    "create_coordinator",
]
