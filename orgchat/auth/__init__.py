from orgchat.auth.client import AuthProviderError, SupabaseAuthClient, auth_client

__all__ = ["AuthProviderError", "SupabaseAuthClient", "auth_client"]
