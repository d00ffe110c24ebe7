# lexrel/shared/container.py
from typing import Optional

from dependency_injector import containers, providers

from lexrel.shared.config import settings
from lexrel.adapters.glove_adaptor import GloVeAdaptor
from lexrel.adapters.index.kd_tree_index import KDTreeNeighborIndex
from lexrel.adapters.persistence.embedding_store import GloveBinaryEmbeddingStore
from lexrel.core.services.similarity import CosineSimilarityScorer

def build_neighbor_index(path: str, enabled: bool, leaf_size: int) -> Optional[KDTreeNeighborIndex]:
    """The k-d tree holds every vector in memory, so it is only built on request."""
    if not enabled:
        return None
    return KDTreeNeighborIndex.from_glove_binary(path, leaf_size=leaf_size)

class Container(containers.DeclarativeContainer):
    """
    Dependency Injection Container.

    This declarative container defines the assembly instructions for the application.
    """

    # 1. Configuration
    # We load settings directly, but wrapping them allows overriding in tests.
    config = providers.Configuration(pydantic_settings=[settings])

    # 2. Gateways (Infrastructure Adapters)

    # Embedding Store (Singleton: one file handle, one dictionary in memory)
    embedding_store = providers.Singleton(
        GloveBinaryEmbeddingStore.open,
        path=config.EMBEDDINGS_PATH,
        in_memory=config.LOAD_VECTORS_IN_MEMORY,
    )

    # Neighbour Index (Singleton: built once from a separate streaming pass)
    neighbor_index = providers.Singleton(
        build_neighbor_index,
        path=config.EMBEDDINGS_PATH,
        enabled=config.BUILD_NEIGHBOR_INDEX,
        leaf_size=config.KD_TREE_LEAF_SIZE,
    )

    # 3. Services
    scorer = providers.Singleton(CosineSimilarityScorer)

    # 4. Lexical API backend
    relatedness_api = providers.Singleton(
        GloVeAdaptor,
        store=embedding_store,
        neighbor_index=neighbor_index,
        scorer=scorer,
        threshold=config.RELATEDNESS_THRESHOLD,
        max_related_words=config.MAX_RELATED_WORDS,
    )
