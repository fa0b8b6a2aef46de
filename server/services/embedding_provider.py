"""
Embedding Provider

Generates embeddings with OpenAI's API (text-embedding-3-small by default).
Retries and timeouts are applied by the caller (EmbeddingResolver); this class
makes exactly one request per call.

Usage:
    provider = OpenAIEmbeddingProvider(api_key="sk-...")
    vector = await provider.embed("A history of the printed book")
"""

import os
from typing import List, Optional

from openai import AsyncOpenAI

from recommender.embedding import EMBEDDING_DIMENSIONS, EMBEDDING_MODEL
from recommender.errors import ProviderError


class OpenAIEmbeddingProvider:
    """EmbeddingProvider backed by the OpenAI embeddings endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = EMBEDDING_MODEL,
        dimensions: int = EMBEDDING_DIMENSIONS,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.api_key = api_key or os.environ.get("OPENAI_API_KEY")
        self.model = model
        self.dimensions = dimensions
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        """Get or create the OpenAI client."""
        if self._client is None:
            if not self.api_key:
                raise ProviderError(
                    "OpenAI API key not provided. Set OPENAI_API_KEY environment variable."
                )
            # Retries are handled by resilient_call
            self._client = AsyncOpenAI(api_key=self.api_key, max_retries=0)
        return self._client

    async def embed(self, text: str) -> List[float]:
        if not text or not text.strip():
            raise ProviderError("Cannot embed empty text")
        response = await self.client.embeddings.create(
            model=self.model,
            input=text,
            dimensions=self.dimensions,
        )
        return list(response.data[0].embedding)


def check_openai_available(api_key: Optional[str] = None) -> tuple[bool, str]:
    """
    Check if OpenAI is configured.

    Returns:
        (is_available, message)
    """
    if not (api_key or os.environ.get("OPENAI_API_KEY")):
        return False, "OPENAI_API_KEY environment variable not set"
    return True, "OpenAI configured and ready"
