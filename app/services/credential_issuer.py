import logging
import secrets

from passlib.context import CryptContext

from app.core.errors import CredentialError
from app.models.credentials import ApiCredential
from app.services.catalog_store import BaseStore
from app.services.validation import validate_credential, CREDENTIAL_TITLE

logger = logging.getLogger(__name__)

# 128 bits, hex encoded to 32 characters
API_KEY_BYTES = 16

pwd_context = CryptContext(
    schemes=["argon2"],
    default="argon2",
    deprecated="auto",
)


def hash_password(password: str) -> str:
    try:
        return pwd_context.hash(password)
    except Exception as e:
        logger.error(f"Error hashing password: {str(e)}")
        raise CredentialError(f"Error processing password: {str(e)}") from e


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def generate_api_key() -> str:
    """Return a new random API key, or raise CredentialError if no random source is available"""
    try:
        return secrets.token_bytes(API_KEY_BYTES).hex()
    except (NotImplementedError, OSError) as e:
        logger.error(f"Random source unavailable: {str(e)}")
        raise CredentialError("Unable to generate a random API key") from e


class CredentialIssuer(BaseStore):
    title = CREDENTIAL_TITLE

    def issue(self, name: str, username: str, password: str) -> str:
        """
        Register a caller and mint an API key for it.

        The password is stored only as an argon2 hash. The key is returned once
        and nothing is written if hashing or key generation fails.
        """
        validate_credential(name, username, password)

        password_hash = hash_password(password)
        api_key = generate_api_key()

        with self._transaction():
            self.db.add(ApiCredential(
                name=name.strip(),
                username=username.strip(),
                password_hash=password_hash,
                api_key=api_key
            ))

        logger.info(f"Issued API key for user: {username.strip()}")
        return api_key
