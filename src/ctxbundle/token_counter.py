"""Counter for tokens, lines, and characters in bundle text.

Token counting uses OpenAI's tiktoken library, an optional dependency. Lines
and characters are always counted; tokens only when a model is given.
"""

import importlib.util
from collections import namedtuple
from typing import Any, Optional

from ctxbundle.exceptions import TokenizationError, TokenizerNotAvailableError

CountResult = namedtuple("CountResult", ["lines", "tokens", "characters"])


def check_tiktoken_available() -> bool:
    """Check if the tiktoken library is available."""
    return importlib.util.find_spec("tiktoken") is not None


class TokenCounter:
    """Running counter for the text appended to a bundle.

    Attributes:
        model (Optional[str]): Name of the model whose tokenizer to use, or None if
            token counting is disabled.
        encoder (Optional[Any]): The tiktoken encoder, or None.

    Example:
        >>> counter = TokenCounter()
        >>> result = counter.count("Hello\\nworld!")
        >>> result.lines, result.characters, result.tokens
        (1, 12, None)
        >>> counter.get_total_characters()
        12

    Raises:
        ValueError: If the specified model's tokenizer cannot be loaded.
        TokenizerNotAvailableError: If a model is given but tiktoken is not installed.
    """

    def __init__(self, model: Optional[str] = None):
        self.model = model
        self.encoder: Optional[Any] = None

        if self.model is not None:
            if not check_tiktoken_available():
                raise TokenizerNotAvailableError()
            self.encoder = self._get_encoder(self.model)

        self._total_tokens: Optional[int] = None if self.encoder is None else 0
        self._total_lines = 0
        self._total_characters = 0

    @staticmethod
    def _get_encoder(model: str) -> Any:
        # Imported here so the counter works without tiktoken installed
        import tiktoken

        try:
            return tiktoken.encoding_for_model(model)
        except KeyError:
            raise ValueError(
                f"Could not load tokenizer for model '{model}'. Consider a well-supported model "
                "like 'gpt-4' (cl100k_base encoding); its counts are a useful approximation for "
                "most modern language models."
            )

    def count(self, text: str) -> CountResult:
        """Count lines, tokens and characters in text and add them to the totals.

        Args:
            text: The text to analyze.

        Returns:
            CountResult: Counts for this text; ``tokens`` is None when token counting
                is disabled.

        Raises:
            TokenizationError: If token counting is enabled but fails. Line and
                character totals are still updated.
        """
        lines = text.count("\n")
        chars = len(text)
        tokens = None

        self._total_lines += lines
        self._total_characters += chars

        if self.encoder is not None:
            try:
                tokens = len(self.encoder.encode(text, disallowed_special=()))
            except Exception as e:
                raise TokenizationError(f"Failed to tokenize text: {str(e)}")
            self._total_tokens = (self._total_tokens or 0) + tokens

        return CountResult(lines=lines, tokens=tokens, characters=chars)

    def get_total_tokens(self) -> Optional[int]:
        return self._total_tokens

    def get_total_lines(self) -> int:
        return self._total_lines

    def get_total_characters(self) -> int:
        return self._total_characters
