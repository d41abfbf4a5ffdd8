"""
Validation of incoming product payloads.

Payloads are parsed through the ``ProductIn`` schema.  Pydantic
collects every failing field, so ``validate_product`` reports all
violated rules at once rather than stopping at the first one; callers
reject the request when the list is non‑empty.
"""

from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from ..core.errors import ValidationFailed
from ..schemas.product import (  # noqa: F401
    CATEGORY_ERROR,
    FIELD_ERRORS,
    NAME_ERROR,
    PRICE_ERROR,
    STOCK_ERROR,
    ProductIn,
)


def _error_messages(exc: ValidationError) -> List[str]:
    messages: List[str] = []
    for error in exc.errors():
        field = error["loc"][0] if error["loc"] else None
        message = FIELD_ERRORS.get(field, error["msg"])
        if message not in messages:
            messages.append(message)
    return messages


def _parse(payload: Any) -> Tuple[Optional[ProductIn], List[str]]:
    # anything other than a JSON object is validated as an empty object
    data: Dict[str, Any] = payload if isinstance(payload, dict) else {}
    try:
        return ProductIn.model_validate(data), []
    except ValidationError as e:
        return None, _error_messages(e)


def validate_product(payload: Any) -> List[str]:
    """Return the list of rule violations for ``payload``."""
    return _parse(payload)[1]


def parse_product(payload: Any) -> ProductIn:
    """Parse ``payload`` or raise ``ValidationFailed`` with every violation."""
    product, errors = _parse(payload)
    if errors:
        raise ValidationFailed(errors)
    return product


def normalize_product(product: ProductIn) -> Dict[str, Any]:
    """Turn a parsed payload into store fields.

    Text fields are trimmed.  A missing, ``null`` or empty description
    is left out so the store can apply its own default (``""`` on
    create, the previous value on update); any other description is
    kept after trimming, even when that leaves it empty.
    """
    fields: Dict[str, Any] = {
        "name": product.name.strip(),
        "price": product.price,
        "category": product.category.strip(),
        "stock": product.stock,
    }
    if product.description:
        fields["description"] = product.description.strip()
    return fields
