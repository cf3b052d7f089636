from .option_input import OptionInput, TollInput
from .pending_option import CreateOption, UpdateOption, PendingOption, CategorizedOperations

__all__ = [
    "OptionInput",
    "TollInput",
    "CreateOption",
    "UpdateOption",
    "PendingOption",
    "CategorizedOperations",
]
