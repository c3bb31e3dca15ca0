from datetime import timedelta

from casafutura.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)


class TestPasswords:
    def test_hash_verifies(self):
        hashed = get_password_hash("una-password")
        assert hashed != "una-password"
        assert verify_password("una-password", hashed)
        assert not verify_password("altra-password", hashed)


class TestTokens:
    def test_round_trip(self):
        token = create_access_token({"sub": "user-1", "role": "guest"})
        payload = decode_access_token(token)
        assert payload["sub"] == "user-1"
        assert payload["role"] == "guest"

    def test_expired_token(self):
        token = create_access_token({"sub": "user-1"}, expires_delta=timedelta(minutes=-1))
        assert decode_access_token(token) is None

    def test_garbage_token(self):
        assert decode_access_token("not-a-token") is None
