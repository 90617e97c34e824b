"""XCore Client SDK — Python client for federated room-based chat homeservers."""

from xcore_sdk.client import Client
from xcore_sdk.errors import SyncProcessingError, XCoreHTTPError, XCoreNetworkError
from xcore_sdk.models.room import Room
from xcore_sdk.store import InMemoryStore, Storer
from xcore_sdk.syncer import DefaultSyncer, Syncer

__all__ = [
    "Client",
    "DefaultSyncer",
    "InMemoryStore",
    "Room",
    "Storer",
    "Syncer",
    "SyncProcessingError",
    "XCoreHTTPError",
    "XCoreNetworkError",
]
