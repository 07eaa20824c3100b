from .brand import BrandCheckResult, evaluate_brand_compliance
from .gate import ComplianceGate
from .guidelines import default_brand_guidelines, load_brand_guidelines
from .legal import LegalCheckResult, evaluate_legal_text

__all__ = [
    "BrandCheckResult",
    "ComplianceGate",
    "evaluate_brand_compliance",
    "default_brand_guidelines",
    "load_brand_guidelines",
    "LegalCheckResult",
    "evaluate_legal_text",
]
