# package marker for app.models

# Import all models to ensure relationships are properly initialized
from app.models.categories import Category
from app.models.plans import Plan
from app.models.addons import Addon
from app.models.sequences import CategorySequence
from app.models.credentials import ApiCredential

__all__ = [
    "Category",
    "Plan",
    "Addon",
    "CategorySequence",
    "ApiCredential"
]
