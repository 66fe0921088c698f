"""Custom exception hierarchy for the résumé chatbot."""


class ChatbotError(Exception):
    """Base exception for all chatbot errors."""


class IngestionError(ChatbotError):
    """Error loading the source document."""


class ParsingError(IngestionError):
    """Error parsing a document file."""


class ChunkingError(IngestionError):
    """Error during text chunking."""


class ProviderError(ChatbotError):
    """An embedding or model provider call failed or timed out."""


class EmbeddingError(ProviderError):
    """Error generating embeddings."""


class GenerationError(ProviderError):
    """Error during answer generation."""


class EmptyGeneration(ChatbotError):
    """The model returned no text."""


class NoRelevantDocuments(ChatbotError):
    """Retrieval produced an empty context."""


class RetrievalError(ChatbotError):
    """Error during retrieval, e.g. querying an index that was never built."""


class ConfigurationError(ChatbotError):
    """Error in system configuration."""
