"""Default spending categories seeded for new users"""

from decimal import Decimal
from typing import List

from mpesa_budgeter.domain.models import Category

FALLBACK_CATEGORY_ID = "other"

DEFAULT_CATEGORIES: List[Category] = [
    Category(id="food", name="Food & Drinks", color="#ef4444", budget_limit=Decimal("5000")),
    Category(id="transport", name="Transport", color="#3b82f6", budget_limit=Decimal("3000")),
    Category(id="bills", name="Bills & Utilities", color="#f59e0b", budget_limit=Decimal("10000")),
    Category(id="shopping", name="Shopping", color="#8b5cf6", budget_limit=Decimal("5000")),
    Category(id=FALLBACK_CATEGORY_ID, name="Other", color="#6b7280", budget_limit=Decimal("2000")),
]
