from .reset_token_manager import ResetTokenManager

__all__ = ["ResetTokenManager"]
