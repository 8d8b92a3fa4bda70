"""Vector store interface, a Qdrant implementation and an in-memory one."""

import math
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Tuple

from qdrant_client import AsyncQdrantClient
from qdrant_client.http.models import Distance, PointStruct, VectorParams

from ..logger import get_logger

logger = get_logger(__name__)

ScoredMetadata = Tuple[Dict[str, Any], float]


class VectorStore(Protocol):
    async def upsert(self, id: str, vector: Sequence[float], metadata: Mapping[str, Any]) -> None:
        """Insert or replace the vector stored under ``id``."""
        ...

    async def search_by_vector(self, vector: Sequence[float], k: int) -> List[ScoredMetadata]:
        """The ``k`` nearest entries as ``(metadata, score)``, best first."""
        ...


class QdrantVectorStore:
    """Recipe vectors kept in a Qdrant collection, compared by cosine distance."""

    def __init__(self, client: AsyncQdrantClient, collection_name: str, vector_size: int) -> None:
        self.client = client
        self.collection_name = collection_name
        self.vector_size = vector_size
        self._collection_ready = False

    @classmethod
    def from_url(
        cls, url: str, collection_name: str, vector_size: int, api_key: Optional[str] = None
    ) -> "QdrantVectorStore":
        return cls(AsyncQdrantClient(url=url, api_key=api_key), collection_name, vector_size)

    async def ensure_collection(self) -> None:
        if self._collection_ready:
            return
        if not await self.client.collection_exists(self.collection_name):
            logger.info("Creating Qdrant collection '%s'.", self.collection_name)
            await self.client.create_collection(
                collection_name=self.collection_name,
                vectors_config=VectorParams(size=self.vector_size, distance=Distance.COSINE),
            )
        self._collection_ready = True

    async def upsert(self, id: str, vector: Sequence[float], metadata: Mapping[str, Any]) -> None:
        await self.ensure_collection()
        await self.client.upsert(
            collection_name=self.collection_name,
            points=[PointStruct(id=id, vector=list(vector), payload=dict(metadata))],
        )

    async def search_by_vector(self, vector: Sequence[float], k: int) -> List[ScoredMetadata]:
        await self.ensure_collection()
        response = await self.client.query_points(
            collection_name=self.collection_name,
            query=list(vector),
            limit=k,
            with_payload=True,
        )
        return [(dict(point.payload or {}), float(point.score)) for point in response.points]


class MemoryVectorStore:
    """Brute-force cosine similarity over vectors held in memory."""

    def __init__(self) -> None:
        self._entries: Dict[str, Tuple[List[float], Dict[str, Any]]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    async def upsert(self, id: str, vector: Sequence[float], metadata: Mapping[str, Any]) -> None:
        self._entries[id] = (list(vector), dict(metadata))

    async def search_by_vector(self, vector: Sequence[float], k: int) -> List[ScoredMetadata]:
        scored = [(dict(metadata), _cosine(vector, stored)) for stored, metadata in self._entries.values()]
        scored.sort(key=lambda item: item[1], reverse=True)
        return scored[:k]


def _cosine(a: Sequence[float], b: Sequence[float]) -> float:
    norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    if not norm:
        return 0.0
    return sum(x * y for x, y in zip(a, b)) / norm
