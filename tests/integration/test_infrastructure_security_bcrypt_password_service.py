"""Integration tests for BcryptPasswordService with real bcrypt."""

import pytest

from src.infrastructure.security.bcrypt_password_service import BcryptPasswordService


@pytest.fixture
def service():
    return BcryptPasswordService(cost_factor=4)


@pytest.mark.integration
class TestBcryptPasswordService:
    def test_hash_and_verify(self, service):
        password_hash = service.hash_password("SecurePass123!")

        assert password_hash.startswith("$2b$04$")
        assert service.verify_password("SecurePass123!", password_hash) is True
        assert service.verify_password("WrongPass123!", password_hash) is False

    def test_hashes_are_salted(self, service):
        assert service.hash_password("same") != service.hash_password("same")

    @pytest.mark.parametrize("password_hash", ["", "not-a-bcrypt-hash", "$2b$04$short"])
    def test_malformed_hash_is_a_mismatch(self, service, password_hash):
        assert service.verify_password("anything", password_hash) is False

    @pytest.mark.parametrize("cost_factor", [3, 32, "12", None, True])
    def test_out_of_range_cost_falls_back_to_default(self, cost_factor):
        assert BcryptPasswordService(cost_factor=cost_factor).cost_factor == 10

    def test_valid_cost_kept(self):
        assert BcryptPasswordService(cost_factor=12).cost_factor == 12

    def test_dummy_hash_is_stable_and_rejects_passwords(self, service):
        dummy = service.dummy_hash

        assert dummy.startswith("$2b$04$")
        assert service.dummy_hash == dummy
        assert service.verify_password("", dummy) is False
        assert service.verify_password("CorrectHorse1", dummy) is False
