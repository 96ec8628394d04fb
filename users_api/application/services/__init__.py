from .authenticator import TokenAuthenticator, digest_token
from .password_hashing import WerkzeugPasswordHasher

__all__ = ["TokenAuthenticator", "WerkzeugPasswordHasher", "digest_token"]
