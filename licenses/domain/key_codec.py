"""
License key codec.

Keys are shown to people as ``PREFIX-XXXXX-XXXXX`` and compared in
that display form. Input is forgiving: case, whitespace and any
separator characters are ignored.
"""
import re

from core.domain.exceptions import InvalidKeyFormatError

DEFAULT_KEY_PREFIX = "OWLTD"
KEY_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
GROUP_LENGTH = 5
KEY_LENGTH = 15

_NON_ALPHANUMERIC = re.compile(r"[^A-Z0-9]")


class KeyCodec:
    """
    Normalizes and renders license keys for one product prefix.

    The prefix must be exactly five characters from ``[0-9A-Z]``; the
    remaining ten characters are the random body of the key.
    """

    def __init__(self, prefix: str = DEFAULT_KEY_PREFIX):
        prefix = (prefix or "").upper()
        if len(prefix) != GROUP_LENGTH or _NON_ALPHANUMERIC.search(prefix):
            raise ValueError(f"Key prefix must be {GROUP_LENGTH} characters from [0-9A-Z]")
        self.prefix = prefix

    @property
    def body_length(self) -> int:
        """Number of random characters after the prefix."""
        return KEY_LENGTH - GROUP_LENGTH

    def normalize(self, raw: str) -> str:
        """
        Normalize user input into the canonical display form.

        Args:
            raw: Key as typed, e.g. ``"owltd abcde 12345"``

        Returns:
            Display form, e.g. ``"OWLTD-ABCDE-12345"``

        Raises:
            InvalidKeyFormatError: If the stripped key is not 15
                characters long or does not start with the prefix
        """
        canonical = self.canonical(raw or "")
        if len(canonical) != KEY_LENGTH or not canonical.startswith(self.prefix):
            raise InvalidKeyFormatError()
        return self.render(canonical)

    def render(self, canonical: str) -> str:
        """
        Insert group separators into a 15-character canonical key.

        Args:
            canonical: Key without separators

        Returns:
            ``PREFIX-XXXXX-XXXXX``
        """
        if len(canonical) != KEY_LENGTH:
            raise InvalidKeyFormatError()
        groups = [canonical[i:i + GROUP_LENGTH] for i in range(0, KEY_LENGTH, GROUP_LENGTH)]
        return "-".join(groups)

    def canonical(self, display: str) -> str:
        """Uppercase and strip every non-alphanumeric character."""
        return _NON_ALPHANUMERIC.sub("", display.upper())

    def is_valid(self, raw: str) -> bool:
        """Whether ``raw`` normalizes to a key of this prefix."""
        try:
            self.normalize(raw)
        except InvalidKeyFormatError:
            return False
        return True

    def compose(self, body: str) -> str:
        """
        Build a display key from a random 10-character body.

        Args:
            body: Characters drawn from ``KEY_ALPHABET``

        Returns:
            Display form of ``prefix + body``
        """
        return self.render(self.prefix + body)
