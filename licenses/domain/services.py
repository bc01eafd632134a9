"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
import logging
import secrets
from typing import Callable, List, Optional

from core.domain.exceptions import KeyGenerationExhaustedError
from licenses.domain.key_codec import KEY_ALPHABET, KeyCodec
from licenses.ports.license_key_repository import LicenseKeyRepository

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 10


class LicenseKeyGenerator:
    """
    Draws unique license key codes.

    Each code is ``prefix`` plus ten characters taken from a
    cryptographically secure source. A candidate is rejected if it
    already exists in the store or earlier in the same batch.
    """

    def __init__(
        self,
        codec: KeyCodec,
        repository: LicenseKeyRepository,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        random_body: Optional[Callable[[int], str]] = None,
    ):
        self.codec = codec
        self.repository = repository
        self.max_attempts = max_attempts
        self._random_body = random_body or self._secure_body

    @staticmethod
    def _secure_body(length: int) -> str:
        return "".join(secrets.choice(KEY_ALPHABET) for _ in range(length))

    async def generate_code(self, taken: Optional[set] = None) -> str:
        """
        Generate one unused key code.

        Args:
            taken: Codes already drawn in the current batch

        Returns:
            Display form of the new code

        Raises:
            KeyGenerationExhaustedError: If no unique code was found
                within ``max_attempts`` draws
        """
        taken = taken if taken is not None else set()
        for attempt in range(1, self.max_attempts + 1):
            code = self.codec.compose(self._random_body(self.codec.body_length))
            if code in taken:
                continue
            if await self.repository.code_exists(code):
                logger.debug("Key code collision on attempt %d", attempt)
                continue
            return code

        logger.error("Key generation exhausted after %d attempts", self.max_attempts)
        raise KeyGenerationExhaustedError()

    async def generate_batch(self, quantity: int) -> List[str]:
        """
        Generate ``quantity`` distinct, unused key codes.

        Raises:
            KeyGenerationExhaustedError: If any code could not be drawn
        """
        codes: List[str] = []
        taken: set = set()
        for _ in range(quantity):
            code = await self.generate_code(taken)
            taken.add(code)
            codes.append(code)
        return codes
