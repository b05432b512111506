class ContextBundleError(Exception):
    """Base class for errors raised while assembling a context bundle."""

    pass


class ProviderError(ContextBundleError):
    """
    Exception raised when an external collaborator fails to deliver its text.

    This covers the diff command exiting with an error, a remote specification
    that cannot be fetched, or a clipboard that cannot be read.

    Example:
        >>> error = ProviderError("git diff failed: not a git repository")
        >>> str(error)
        'git diff failed: not a git repository'
    """

    pass


class ClipboardNotAvailableError(ProviderError):
    """
    Exception raised when the clipboard is requested but no clipboard backend works.

    pyperclip relies on a platform mechanism (pbcopy, xclip, xsel, wl-clipboard,
    the Windows API). When none is present, reading or writing the clipboard fails.

    Attributes:
        message (str): Detailed error message including installation hints.
    """

    def __init__(self, message: str = "No clipboard mechanism is available.") -> None:
        """
        Initialize the exception with an informative error message.

        Args:
            message (str, optional): Base error message. Hints on making a clipboard
                available are appended to it.
        """
        self.message = (
            f"{message} On Linux install xclip, xsel or wl-clipboard; "
            "alternatively write the bundle to a file with -o/--output."
        )
        super().__init__(self.message)


class TokenizerNotAvailableError(ContextBundleError):
    """
    Exception raised when token counting is requested without the tokenizer package.

    tiktoken is an optional dependency installed through the 'token_counting' extra.

    Example:
        >>> error = TokenizerNotAvailableError()
        >>> str(error).startswith('Tokenizer (tiktoken) is not installed')
        True
    """

    def __init__(self, message: str = "Tokenizer (tiktoken) is not installed.") -> None:
        self.message = (
            f"{message} To enable token counting, install ctxbundle with the 'token_counting' "
            "extra: 'pip install ctxbundle[token_counting]'."
        )
        super().__init__(self.message)


class TokenizationError(ContextBundleError):
    """
    Exception raised when the tokenizer is available but fails on the input text.

    Example:
        >>> error = TokenizationError("Failed to tokenize: invalid input")
        >>> str(error)
        'Failed to tokenize: invalid input'
    """

    pass
