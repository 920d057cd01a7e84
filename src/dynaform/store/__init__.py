"""
Descriptor stores for dynaform.

- DescriptorStore: the persistence collaborator interface
- InMemoryDescriptorStore: reference in-process store
- HttpDescriptorStore: httpx client for a remote descriptor API
- DescriptorCache: freshness window and fetch retry on top of a store
"""

from dynaform.store.base import DescriptorStore
from dynaform.store.cache import DescriptorCache
from dynaform.store.http import HttpDescriptorStore
from dynaform.store.memory import SAMPLE_FORM, InMemoryDescriptorStore

__all__ = [
    "DescriptorStore",
    "DescriptorCache",
    "HttpDescriptorStore",
    "InMemoryDescriptorStore",
    "SAMPLE_FORM",
]
