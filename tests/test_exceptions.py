"""Tests for custom exceptions."""

from ctxbundle.exceptions import (
    ClipboardNotAvailableError,
    ContextBundleError,
    ProviderError,
    TokenizationError,
    TokenizerNotAvailableError,
)


class TestExceptionHierarchy:
    def test_all_derive_from_base(self):
        for exception_type in (ProviderError, ClipboardNotAvailableError, TokenizerNotAvailableError, TokenizationError):
            assert issubclass(exception_type, ContextBundleError)

    def test_clipboard_error_is_a_provider_error(self):
        assert issubclass(ClipboardNotAvailableError, ProviderError)


class TestMessages:
    def test_tokenizer_not_available_error(self):
        error = TokenizerNotAvailableError()
        assert "Tokenizer (tiktoken) is not installed" in str(error)
        assert "pip install ctxbundle[token_counting]" in str(error)

    def test_tokenizer_not_available_error_custom_message(self):
        error = TokenizerNotAvailableError("Custom tokenizer error")
        assert str(error).startswith("Custom tokenizer error")
        assert error.message == str(error)

    def test_clipboard_not_available_error(self):
        error = ClipboardNotAvailableError("Cannot read the clipboard.")
        assert str(error).startswith("Cannot read the clipboard.")
        assert "-o/--output" in str(error)

    def test_provider_error(self):
        assert str(ProviderError("git diff failed")) == "git diff failed"
