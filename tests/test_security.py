"""Unit tests for quizdeck.core.security and token claim projection."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from quizdeck.core.security import (
    create_access_token,
    decode_access_token,
    generate_session_token,
    hash_password,
    verify_password,
)
from quizdeck.models import UserRole
from quizdeck.schemas.auth import TokenClaims
from quizdeck.services.auth import InvalidToken, decode_claims


class TestPasswordHashing(unittest.TestCase):
    """hash_password / verify_password use bcrypt and never store the plain password."""

    def test_verify_accepts_correct_password(self) -> None:
        hashed = hash_password("correct horse")
        self.assertNotEqual(hashed, "correct horse")
        self.assertTrue(verify_password("correct horse", hashed))

    def test_verify_rejects_wrong_password(self) -> None:
        hashed = hash_password("correct horse")
        self.assertFalse(verify_password("battery staple", hashed))

    def test_verify_rejects_malformed_hash(self) -> None:
        self.assertFalse(verify_password("anything", "not-a-bcrypt-hash"))

    def test_same_password_gets_different_salts(self) -> None:
        self.assertNotEqual(hash_password("same-password"), hash_password("same-password"))


class TestSessionToken(unittest.TestCase):
    def test_tokens_are_unique_and_long(self) -> None:
        tokens = {generate_session_token() for _ in range(50)}
        self.assertEqual(len(tokens), 50)
        self.assertTrue(all(len(t) >= 40 for t in tokens))


class TestAccessToken(unittest.TestCase):
    """Signed token carries {sub, role} and expires after the session horizon."""

    def test_round_trip_claims(self) -> None:
        token = create_access_token(sub="u1", role="ADMIN")
        claims = decode_claims(token)
        self.assertEqual(claims, TokenClaims(id="u1", role=UserRole.ADMIN))

    def test_payload_has_only_identity_and_time_claims(self) -> None:
        token = create_access_token(sub=7, role=UserRole.COMMON)
        payload = decode_access_token(token)
        self.assertEqual(set(payload), {"sub", "role", "exp", "iat"})
        self.assertEqual(payload["sub"], "7")
        self.assertEqual(payload["role"], "COMMON")

    def test_session_id_stored_as_sid(self) -> None:
        token = create_access_token(sub=7, role=UserRole.COMMON, session_id="row-token")
        self.assertEqual(decode_access_token(token)["sid"], "row-token")
        self.assertEqual(decode_claims(token).session_id, "row-token")

    def test_expiry_matches_session_horizon(self) -> None:
        now = datetime.now(UTC).replace(microsecond=0)
        payload = decode_access_token(create_access_token(sub=1, role="COMMON", now=now))
        self.assertEqual(payload["exp"] - payload["iat"], 10 * 60)

    def test_decode_after_horizon_fails(self) -> None:
        issued = datetime.now(UTC) - timedelta(minutes=11)
        token = create_access_token(sub="u1", role="ADMIN", now=issued)
        with self.assertRaises(jwt.ExpiredSignatureError):
            decode_access_token(token)
        with self.assertRaises(InvalidToken):
            decode_claims(token)

    def test_decode_just_before_horizon_succeeds(self) -> None:
        issued = datetime.now(UTC) - timedelta(minutes=9)
        claims = decode_claims(create_access_token(sub="u1", role="COMMON", now=issued))
        self.assertEqual(claims.id, "u1")

    def test_tampered_token_fails(self) -> None:
        token = create_access_token(sub="u1", role="COMMON")
        other = jwt.encode(
            {"sub": "u1", "role": "ADMIN", "exp": datetime.now(UTC) + timedelta(minutes=5)},
            "some-other-secret",
            algorithm="HS256",
        )
        with self.assertRaises(InvalidToken):
            decode_claims(other)
        with self.assertRaises(InvalidToken):
            decode_claims(token[:-2] + ("AA" if not token.endswith("AA") else "BB"))

    def test_malformed_token_fails(self) -> None:
        with self.assertRaises(InvalidToken):
            decode_claims("not.a.jwt")

    def test_unknown_role_fails(self) -> None:
        token = create_access_token(sub="u1", role="SUPERUSER")
        with self.assertRaises(InvalidToken):
            decode_claims(token)


if __name__ == "__main__":
    unittest.main()
