"""
Unit tests for LicenseKeyGenerator.
"""
import itertools
import re

import pytest

from core.domain.exceptions import KeyGenerationExhaustedError
from licenses.domain.services import LicenseKeyGenerator

KEY_PATTERN = re.compile(r"^OWLTD-[0-9A-Z]{5}-[0-9A-Z]{5}$")


def _sequence(*bodies):
    """Random body source returning ``bodies`` in order."""
    values = itertools.chain(bodies, itertools.repeat(bodies[-1]))
    return lambda length: next(values)


@pytest.mark.asyncio
class TestLicenseKeyGenerator:
    """Tests for LicenseKeyGenerator."""

    async def test_generated_codes_are_well_formed(self, codec, license_key_repository):
        """Test every code matches the display format and normalizes to itself."""
        generator = LicenseKeyGenerator(codec, license_key_repository)
        codes = await generator.generate_batch(50)
        for code in codes:
            assert KEY_PATTERN.match(code)
            assert codec.normalize(code) == code

    async def test_ten_thousand_codes_are_unique(self, codec, license_key_repository):
        """Test a large batch contains no duplicates."""
        generator = LicenseKeyGenerator(codec, license_key_repository)
        codes = await generator.generate_batch(10000)
        assert len(set(codes)) == 10000

    async def test_existing_code_is_redrawn(self, codec):
        """Test a code already in the store is skipped."""
        from tests.fakes import InMemoryLicenseKeyRepository

        repository = InMemoryLicenseKeyRepository(existing_codes={"OWLTD-AAAAA-AAAAA"})
        generator = LicenseKeyGenerator(
            codec, repository, random_body=_sequence("AAAAAAAAAA", "BBBBBBBBBB")
        )
        assert await generator.generate_code() == "OWLTD-BBBBB-BBBBB"

    async def test_duplicate_within_batch_is_redrawn(self, codec, license_key_repository):
        """Test a batch never repeats a code."""
        generator = LicenseKeyGenerator(
            codec,
            license_key_repository,
            random_body=_sequence("AAAAAAAAAA", "AAAAAAAAAA", "CCCCCCCCCC"),
        )
        codes = await generator.generate_batch(2)
        assert codes == ["OWLTD-AAAAA-AAAAA", "OWLTD-CCCCC-CCCCC"]

    async def test_exhaustion_after_max_attempts(self, codec):
        """Test KeyGenerationExhaustedError when every draw collides."""
        from tests.fakes import InMemoryLicenseKeyRepository

        repository = InMemoryLicenseKeyRepository(existing_codes={"OWLTD-AAAAA-AAAAA"})
        generator = LicenseKeyGenerator(
            codec, repository, max_attempts=3, random_body=_sequence("AAAAAAAAAA")
        )
        with pytest.raises(KeyGenerationExhaustedError) as exc_info:
            await generator.generate_batch(1)
        assert exc_info.value.code == "GENERATION_EXHAUSTED"
