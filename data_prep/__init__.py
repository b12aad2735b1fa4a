"""
Data preparation — plan validation and persistence (files and share tokens).
"""

from .validators import ValidationResult, parse_configuration, validate_configuration, validate_projection
from .persistence import (
    decode_share_token,
    encode_share_token,
    load_plan,
    plan_from_dict,
    plan_to_dict,
    save_plan,
)

__all__ = [
    "ValidationResult",
    "parse_configuration",
    "validate_configuration",
    "validate_projection",
    "decode_share_token",
    "encode_share_token",
    "load_plan",
    "plan_from_dict",
    "plan_to_dict",
    "save_plan",
]
