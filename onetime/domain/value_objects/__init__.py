from .token_code import CodeGenerator, TokenCode
from .token_filter import TokenChanges, TokenFilter

__all__ = ["CodeGenerator", "TokenCode", "TokenChanges", "TokenFilter"]
