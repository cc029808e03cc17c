"""Authentication service for JWT sessions and password handling."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from ledger.config import Settings
from ledger.errors import ServiceError
from ledger.models.enums import Role


@dataclass(frozen=True)
class AuthSession:
    """Identity asserted by a verified session token."""

    user_id: str
    role: Role


class CredentialManager:
    """Hashes passwords with Argon2 and issues/verifies signed session tokens."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.pwd_context = CryptContext(
            schemes=["argon2"],
            deprecated="auto",
            argon2__type="id",
            argon2__salt_size=settings.argon_salt_length,
            argon2__digest_size=settings.argon_hash_length,
            argon2__rounds=settings.argon_time_cost,
            argon2__memory_cost=settings.argon_memory_cost,
        )

    def hash_password(self, password: str) -> str:
        """Hash a password."""
        return self.pwd_context.hash(password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash."""
        try:
            return self.pwd_context.verify(plain_password, hashed_password)
        except ValueError:
            # Stored value is not a hash this context understands
            return False

    def dummy_verify(self) -> None:
        """Spend the time of a real verify when there is no hash to check against."""
        self.pwd_context.dummy_verify()

    def issue_session(self, user_id: str, role: Role | str) -> str:
        """Create a signed session token for the given user."""
        now = datetime.now(UTC)
        expire = now + timedelta(minutes=self.settings.jwt_expiration_minutes)
        to_encode = {
            "sub": str(user_id),
            "role": Role(role).value,
            "iat": now,
            "exp": expire,
            "iss": self.settings.jwt_issuer,
            "aud": self.settings.jwt_audience,
        }
        return jwt.encode(
            to_encode, self.settings.jwt_secret, algorithm=self.settings.jwt_algorithm
        )

    def verify_session(self, token: str) -> AuthSession:
        """Decode and validate a session token.

        Raises:
            ServiceError: UNAUTHORIZED when the signature, issuer or audience
                do not check out, the token expired or its claims are incomplete.
        """
        try:
            payload = jwt.decode(
                token,
                self.settings.jwt_secret,
                algorithms=[self.settings.jwt_algorithm],
                audience=self.settings.jwt_audience,
                issuer=self.settings.jwt_issuer,
            )
        except ExpiredSignatureError:
            raise ServiceError.unauthorized("The token has expired") from None
        except JWTError:
            raise ServiceError.unauthorized("Invalid authentication token") from None

        user_id = payload.get("sub")
        role = payload.get("role")
        if not user_id or role not in {r.value for r in Role}:
            raise ServiceError.unauthorized("Invalid authentication token")

        return AuthSession(user_id=user_id, role=Role(role))
