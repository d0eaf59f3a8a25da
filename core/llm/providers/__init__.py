# Importing the providers registers them with the provider registry.
from core.llm.providers import dummy_provider, openai  # noqa: F401
