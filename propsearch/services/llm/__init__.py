"""Language model services"""

from .anthropic_client import AnthropicLanguageModel, LanguageModel

__all__ = ["AnthropicLanguageModel", "LanguageModel"]
