"""In-memory stand-ins used by the test suite"""
import copy
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError


class FakeInsertResult:
    def __init__(self, inserted_id: ObjectId):
        self.inserted_id = inserted_id


class FakeCursor:
    def __init__(self, docs: List[Dict[str, Any]]):
        self._docs = docs

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        if length is None:
            return list(self._docs)
        return list(self._docs[:length])


class FakeCollection:
    """
    Minimal async collection covering the calls TaskRepository makes.

    - Keeps documents in insertion order
    - Records every call in `calls` for assertions
    - Raises `error` from every operation when set
    """

    def __init__(self):
        self.docs: List[Dict[str, Any]] = []
        self.calls: List[str] = []
        self.error: Optional[PyMongoError] = None

    def _record(self, name: str):
        self.calls.append(name)
        if self.error is not None:
            raise self.error

    def _index(self, query: Dict[str, Any]) -> Optional[int]:
        for i, doc in enumerate(self.docs):
            if all(doc.get(k) == v for k, v in query.items()):
                return i
        return None

    def find(self, query: Dict[str, Any]) -> FakeCursor:
        self._record("find")
        return FakeCursor([copy.deepcopy(d) for d in self.docs if all(d.get(k) == v for k, v in query.items())])

    async def find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        self._record("find_one")
        i = self._index(query)
        return None if i is None else copy.deepcopy(self.docs[i])

    async def insert_one(self, doc: Dict[str, Any]) -> FakeInsertResult:
        self._record("insert_one")
        stored = copy.deepcopy(doc)
        stored.setdefault("_id", ObjectId())
        self.docs.append(stored)
        return FakeInsertResult(stored["_id"])

    async def find_one_and_update(self, query, update, return_document=ReturnDocument.BEFORE):
        self._record("find_one_and_update")
        i = self._index(query)
        if i is None:
            return None
        before = copy.deepcopy(self.docs[i])
        self.docs[i].update(copy.deepcopy(update["$set"]))
        return copy.deepcopy(self.docs[i]) if return_document == ReturnDocument.AFTER else before

    async def find_one_and_delete(self, query):
        self._record("find_one_and_delete")
        i = self._index(query)
        if i is None:
            return None
        return self.docs.pop(i)


class ManualScheduler:
    """Deterministic replacement for loop.call_later; time moves only on advance()"""

    def __init__(self):
        self.now = 0.0
        self.pending: List[tuple] = []

    def __call__(self, delay: float, callback):
        self.pending.append((self.now + delay, callback))

    def advance(self, seconds: float):
        self.now += seconds
        due = [item for item in self.pending if item[0] <= self.now]
        self.pending = [item for item in self.pending if item[0] > self.now]
        for _, callback in sorted(due, key=lambda item: item[0]):
            callback()
