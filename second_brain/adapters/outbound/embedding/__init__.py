from .openai_adapter import OpenAIEmbeddingAdapter

__all__ = ["OpenAIEmbeddingAdapter"]
