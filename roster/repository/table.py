from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar

V = TypeVar("V")
K = TypeVar("K")


class Table(ABC, Generic[V, K]):
    """
    One table, one record type V keyed by K.

    Implementations run a single statement per call over a borrowed
    connection and report storage failures as False / None instead of raising.
    """

    @property
    @abstractmethod
    def table_name(self) -> str: ...

    @abstractmethod
    def create_table(self) -> bool: ...

    @abstractmethod
    def drop_table(self) -> bool: ...

    @abstractmethod
    def find_by_primary_key(self, key: K) -> Optional[V]: ...

    @abstractmethod
    def find_all(self) -> Optional[List[V]]: ...

    @abstractmethod
    def save(self, value: V) -> bool: ...

    @abstractmethod
    def update(self, value: V) -> bool: ...

    @abstractmethod
    def delete(self, key: K) -> bool: ...
