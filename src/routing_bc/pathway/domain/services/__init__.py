from .option_rules import calculate_avg_speed, merge_update_fields, validate_option_rules
from .toll_validator import validate_option_tolls, validate_tolls

__all__ = [
    "calculate_avg_speed",
    "merge_update_fields",
    "validate_option_rules",
    "validate_option_tolls",
    "validate_tolls",
]
