"""Access to the host: selected entries, diff text and remote documents.

The bundle only talks to the outside world through a ContextProvider, so the
traversal and matching logic can be exercised without a clipboard, a version
control checkout or a network connection.
"""

import subprocess
import urllib.request
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Mapping, Optional, Sequence
from urllib.error import URLError

import pyperclip

from ctxbundle.exceptions import ClipboardNotAvailableError, ProviderError
from ctxbundle.types import PathType

DEFAULT_DIFF_COMMAND = ("git", "diff")


def parse_selection(text: str) -> List[str]:
    """Split pasted text into selected entries, one per non-blank line.

    Example:
        >>> parse_selection("src/main.py\\n\\n  file:///srv/project/README.md \\n")
        ['src/main.py', 'file:///srv/project/README.md']
    """
    return [line.strip() for line in text.splitlines() if line.strip()]


def read_clipboard() -> str:
    """Return the clipboard text.

    Raises:
        ClipboardNotAvailableError: If no clipboard mechanism works on this system.
    """
    try:
        return pyperclip.paste()
    except pyperclip.PyperclipException as e:
        raise ClipboardNotAvailableError(f"Cannot read the clipboard: {e}.") from e


def write_clipboard(text: str) -> None:
    """Replace the clipboard contents with the given text.

    Raises:
        ClipboardNotAvailableError: If no clipboard mechanism works on this system.
    """
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        raise ClipboardNotAvailableError(f"Cannot write the clipboard: {e}.") from e


class ContextProvider(ABC):
    """Capability giving the bundle access to host-provided text."""

    @abstractmethod
    def read_selected_entries(self) -> List[str]:
        """Return the selected files and directories, in selection order."""
        pass

    @abstractmethod
    def read_diff_text(self) -> str:
        """Return the working-tree diff of the project."""
        pass

    @abstractmethod
    def fetch_remote_text(self, url: str) -> str:
        """Return the text of a remote document.

        Raises:
            ProviderError: If the document cannot be retrieved.
        """
        pass


class StaticProvider(ContextProvider):
    """Provider answering from values given up front.

    Example:
        >>> provider = StaticProvider(["src"], diff_text="+added\\n", remote_texts={"https://x/spec": "SPEC"})
        >>> provider.read_selected_entries()
        ['src']
        >>> provider.fetch_remote_text("https://x/spec")
        'SPEC'
    """

    def __init__(
        self,
        selected: Sequence[str] = (),
        diff_text: str = "",
        remote_texts: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.selected = list(selected)
        self.diff_text = diff_text
        self.remote_texts = dict(remote_texts or {})

    def read_selected_entries(self) -> List[str]:
        return list(self.selected)

    def read_diff_text(self) -> str:
        return self.diff_text

    def fetch_remote_text(self, url: str) -> str:
        try:
            return self.remote_texts[url]
        except KeyError:
            raise ProviderError(f"No remote text available for {url}")


class SystemProvider(ContextProvider):
    """Provider backed by the command line, the clipboard, git and the network.

    Attributes:
        root (Path): Directory the diff command runs in.
        selected (Optional[List[str]]): Explicitly selected entries. When there are
            none and ``from_clipboard`` is set, entries are read from the clipboard.
        from_clipboard (bool): Whether to read the selection from the clipboard.
        diff_command (Sequence[str]): Command printing the diff on stdout.
        timeout (float): Seconds to wait for the diff command or a remote document.
    """

    def __init__(
        self,
        root: PathType,
        selected: Optional[Sequence[str]] = None,
        from_clipboard: bool = False,
        diff_command: Sequence[str] = DEFAULT_DIFF_COMMAND,
        timeout: float = 30.0,
    ) -> None:
        self.root = Path(root)
        self.selected = list(selected) if selected is not None else None
        self.from_clipboard = from_clipboard
        self.diff_command = tuple(diff_command)
        self.timeout = timeout

    def read_selected_entries(self) -> List[str]:
        if self.selected:
            return list(self.selected)
        if self.from_clipboard:
            return parse_selection(read_clipboard())
        return []

    def read_diff_text(self) -> str:
        command = " ".join(self.diff_command)
        try:
            result = subprocess.run(
                self.diff_command,
                cwd=self.root,
                capture_output=True,
                text=True,
                check=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise ProviderError(f"Diff command not found: {command}") from e
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or "").strip()
            raise ProviderError(f"'{command}' exited with status {e.returncode}: {detail}") from e
        except subprocess.TimeoutExpired as e:
            raise ProviderError(f"'{command}' timed out after {self.timeout} seconds") from e
        return result.stdout

    def fetch_remote_text(self, url: str) -> str:
        try:
            with urllib.request.urlopen(url, timeout=self.timeout) as response:
                charset = response.headers.get_content_charset() or "utf-8"
                return response.read().decode(charset, errors="replace")
        except (URLError, OSError, ValueError) as e:
            raise ProviderError(f"Failed to fetch '{url}': {e}") from e
