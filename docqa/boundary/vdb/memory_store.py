"""
FAISS vector index for local development.

Provides the same interface as S3VectorsIndex but keeps a LangChain FAISS
store in process. Vectors are L2-normalized with faiss and compared by inner
product, so scores are cosine similarities. Embedding happens upstream; the
store only receives precomputed vectors.

Dependencies: faiss-cpu, langchain_community.vectorstores
System role: Development vector store (local testing only)
"""

import logging

import faiss
import numpy as np
from langchain_community.docstore.in_memory import InMemoryDocstore
from langchain_community.vectorstores import FAISS
from langchain_community.vectorstores.utils import DistanceStrategy
from langchain_core.embeddings import Embeddings

from docqa.boundary.vdb.vector_schemas import IndexRecord, RecordMetadata, VectorMatch

logger = logging.getLogger(__name__)

RECORD_ID_KEY = "record_id"


def _normalized(vectors: list[list[float]]) -> list[list[float]]:
    array = np.asarray(vectors, dtype=np.float32)
    faiss.normalize_L2(array)
    return array.tolist()


class PrecomputedEmbeddings(Embeddings):
    """Placeholder embedding function; records arrive already embedded."""

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        raise NotImplementedError("InMemoryVectorIndex only accepts precomputed vectors")

    def embed_query(self, text: str) -> list[float]:
        raise NotImplementedError("InMemoryVectorIndex only accepts precomputed vectors")


class InMemoryVectorIndex:
    """
    FAISS-backed vector index with cosine ranking.

    The FAISS index is created on the first upsert, once the vector dimension
    is known.
    """

    def __init__(self, index_name: str = "documents") -> None:
        self.index_name = index_name
        self._store: FAISS | None = None

    def _create_store(self, dimension: int) -> FAISS:
        logger.info(
            f"{__name__}:_create_store - Creating FAISS index",
            extra={"index": self.index_name, "dimension": dimension},
        )
        return FAISS(
            embedding_function=PrecomputedEmbeddings(),
            index=faiss.IndexFlatIP(dimension),
            docstore=InMemoryDocstore(),
            index_to_docstore_id={},
            distance_strategy=DistanceStrategy.MAX_INNER_PRODUCT,
        )

    def _record_ids(self) -> set[str]:
        if self._store is None:
            return set()
        return set(self._store.index_to_docstore_id.values())

    async def upsert(self, records: list[IndexRecord]) -> None:
        # Last write wins for repeated ids within one call
        latest = {record.id: record for record in records}
        if not latest:
            return
        if self._store is None:
            self._store = self._create_store(len(next(iter(latest.values())).vector))

        stale = [record_id for record_id in latest if record_id in self._record_ids()]
        if stale:
            self._store.delete(stale)

        vectors = _normalized([record.vector for record in latest.values()])
        self._store.add_embeddings(
            text_embeddings=[
                (record.metadata.text, embedded) for record, embedded in zip(latest.values(), vectors)
            ],
            metadatas=[
                {**record.metadata.model_dump(), RECORD_ID_KEY: record.id}
                for record in latest.values()
            ],
            ids=list(latest),
        )
        logger.debug(
            f"{__name__}:upsert - Upserted {len(latest)} records",
            extra={"index": self.index_name, "total": len(self)},
        )

    async def query(
        self,
        vector: list[float],
        top_k: int,
        include_metadata: bool = True,
        content_hash: str | None = None,
    ) -> list[VectorMatch]:
        if self._store is None or len(self) == 0:
            return []

        search_filter = {"content_hash": content_hash} if content_hash else None
        results = self._store.similarity_search_with_score_by_vector(
            _normalized([vector])[0],
            k=top_k,
            filter=search_filter,
            fetch_k=len(self),
        )

        matches = []
        for document, score in results:
            metadata = dict(document.metadata)
            record_id = metadata.pop(RECORD_ID_KEY)
            matches.append(
                VectorMatch(
                    id=record_id,
                    score=float(score),
                    metadata=RecordMetadata(**metadata) if include_metadata else None,
                )
            )
        return matches

    def get(self, record_id: str) -> RecordMetadata | None:
        """Return the stored metadata for a record id."""
        if self._store is None:
            return None
        document = self._store.docstore.search(record_id)
        if isinstance(document, str):
            return None
        metadata = dict(document.metadata)
        metadata.pop(RECORD_ID_KEY, None)
        return RecordMetadata(**metadata)

    def __len__(self) -> int:
        return len(self._record_ids())

    def clear(self) -> None:
        self._store = None
