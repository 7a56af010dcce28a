from .client import AuthError, BackendError, SessionExpiredError, SupabaseClient, get_client

__all__ = ["AuthError", "BackendError", "SessionExpiredError", "SupabaseClient", "get_client"]
