"""chainQL validation layer: semantic checks run before compilation."""
from chainql.validate.action_validator import ActionValidator
from chainql.validate.projection_validator import ProjectionValidator
from chainql.validate.semantic_validator import SemanticValidator
from chainql.validate.validator import BindingsValidator

__all__ = [
    "ActionValidator",
    "BindingsValidator",
    "ProjectionValidator",
    "SemanticValidator",
]
