from .repos import Credential, ICredentialStore

__all__ = ["Credential", "ICredentialStore"]
