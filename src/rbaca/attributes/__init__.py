from rbaca.attributes.models import AttributeContext, MissingAttributePolicy
from rbaca.attributes.registry import AttributeRegistry, Predicate

__all__ = [
    "AttributeContext",
    "AttributeRegistry",
    "MissingAttributePolicy",
    "Predicate",
]
