from fastapi import Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.services.catalog_store import AddonStore, CategoryStore, PlanStore
from app.services.credential_issuer import CredentialIssuer


def get_category_store(db: Session = Depends(get_db)) -> CategoryStore:
    return CategoryStore(db)


def get_plan_store(db: Session = Depends(get_db)) -> PlanStore:
    return PlanStore(db)


def get_addon_store(db: Session = Depends(get_db)) -> AddonStore:
    return AddonStore(db)


def get_credential_issuer(db: Session = Depends(get_db)) -> CredentialIssuer:
    """Each request gets its own issuer bound to the request's session"""
    return CredentialIssuer(db)
