import re

import pytest

from app.core.errors import CredentialError, ValidationError
from app.models.credentials import ApiCredential
from app.services import credential_issuer
from app.services.credential_issuer import CredentialIssuer, generate_api_key, verify_password


@pytest.fixture
def issuer(db):
    return CredentialIssuer(db)


def test_issue_persists_hashed_credential(issuer, db):
    api_key = issuer.issue("Acme Corp", "acme", "s3cret")

    assert re.fullmatch(r"[0-9a-f]{32}", api_key)
    record = db.query(ApiCredential).filter(ApiCredential.api_key == api_key).one()
    assert record.name == "Acme Corp"
    assert record.username == "acme"
    assert record.password_hash != "s3cret"
    assert verify_password("s3cret", record.password_hash)
    assert not verify_password("wrong", record.password_hash)


def test_same_username_gets_distinct_keys(issuer, db):
    first = issuer.issue("Acme Corp", "acme", "s3cret")
    second = issuer.issue("Acme Corp", "acme", "s3cret")
    assert first != second
    assert db.query(ApiCredential).filter(ApiCredential.username == "acme").count() == 2


def test_generated_keys_do_not_repeat():
    keys = {generate_api_key() for _ in range(10000)}
    assert len(keys) == 10000


def test_random_source_failure_is_reported(issuer, db, monkeypatch):
    def no_entropy(nbytes):
        raise NotImplementedError("no random source")

    monkeypatch.setattr(credential_issuer.secrets, "token_bytes", no_entropy)

    with pytest.raises(CredentialError) as exc:
        issuer.issue("Acme Corp", "acme", "s3cret")
    assert exc.value.code == 500
    assert exc.value.title == "API KEY Creation Error"
    assert db.query(ApiCredential).count() == 0


def test_hashing_failure_is_reported(issuer, db, monkeypatch):
    def broken_hash(secret):
        raise ValueError("backend missing")

    monkeypatch.setattr(credential_issuer.pwd_context, "hash", broken_hash)

    with pytest.raises(CredentialError):
        issuer.issue("Acme Corp", "acme", "s3cret")
    assert db.query(ApiCredential).count() == 0


def test_missing_fields_rejected(issuer, db):
    with pytest.raises(ValidationError):
        issuer.issue("Acme Corp", "", "s3cret")
    assert db.query(ApiCredential).count() == 0
